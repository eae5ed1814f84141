"""Extractor for video.udn.com."""

from __future__ import annotations

import re

from annie import request, utils
from annie.types import (
    Data,
    DataType,
    ExtractionError,
    Extractor,
    Options,
    Part,
    Stream,
    URLParseFailedError,
)

_SITE = "udn udn.com"
_EMBED_PREFIX = "https://video.udn.com/embed/"
_START_FLAG = "',\n            mp4: '//"
_END_FLAG = "'\n        },\n        subtitles"
_CDN_PATTERN = re.escape(_START_FLAG) + "(.+?)" + re.escape(_END_FLAG)
_TITLE_PATTERN = r"title: '(.+?)',\n        link:"


def get_cdn_url(html: str) -> str:
    """Return the CDN address of the video source in the embed page, or ""."""
    match = utils.match_one_of(html, _CDN_PATTERN)
    if match is not None and len(match) > 1 and match[1]:
        return match[1]
    return ""


def prepare_embed_url(url: str) -> str:
    """Turn a news URL into the address of its embed page."""
    if _EMBED_PREFIX in url:
        return url
    return "https://video.udn.com/embed/news/" + url.split("/")[-1]


class UdnExtractor(Extractor):
    """Extracts videos from udn news pages."""

    def extract(self, url: str, options: Options) -> list[Data]:
        url = prepare_embed_url(url)
        if not url:
            raise URLParseFailedError()

        html = request.get(url, url, None)
        match = utils.match_one_of(html, _TITLE_PATTERN)
        page_title = match[1] if match is not None and len(match) > 1 else "udn"

        cdn_url = get_cdn_url(html)
        if not cdn_url:
            raise ExtractionError("empty list")
        src_url = request.get("http://" + cdn_url, url, None)
        size = request.size(src_url, url)

        quality = "normal"
        stream = Stream(
            parts=[Part(url=src_url, size=size, ext="mp4")],
            size=size,
            quality=quality,
        )
        return [
            Data(
                site=_SITE,
                title=page_title,
                type=DataType.VIDEO,
                streams={quality: stream},
                url=url,
            )
        ]