"""Site extractors for Tumblr, udn, Vimeo, XVIDEOS, Yinyuetai, Youku and plain file URLs."""