# annie

A library that pulls video and image information out of web pages. Each
supported site has an extractor that turns a page URL into a list of
`annie.types.Data` records: a title, a site name, a data type and a dict of
streams, each made of one or more parts with their URLs, sizes and file
extensions.

## Installing

```
pip install .
pip install ".[test]"   # with pytest and responses for the test suite
```

## Supported sites

| Site         | Extractor                                       |
|--------------|-------------------------------------------------|
| Tumblr       | `annie.extractors.tumblr.TumblrExtractor`       |
| udn          | `annie.extractors.udn.UdnExtractor`             |
| Vimeo        | `annie.extractors.vimeo.VimeoExtractor`         |
| XVIDEOS      | `annie.extractors.xvideos.XvideosExtractor`     |
| Yinyuetai    | `annie.extractors.yinyuetai.YinyuetaiExtractor` |
| Youku        | `annie.extractors.youku.YoukuExtractor`         |
| Any file URL | `annie.extractors.universal.UniversalExtractor` |

Every extractor subclasses `annie.types.Extractor` and has one method,
`extract(url, options)`, taking an `annie.types.Options` (playlist selection,
cookie, and the Youku `youku_ccode`, `youku_ckey` and `youku_password`
settings).

## Extracting data

```python
from annie import request
from annie.types import Options
from annie.extractors.universal import UniversalExtractor

request.set_options(request.Options(retry_times=3))
data = UniversalExtractor().extract("https://example.com/picture.jpg", Options())
for item in data:
    item.fill_up_streams_data()
    print(item.to_dict())
```

`Data.fill_up_streams_data()` sets each stream's id from its key, uses the id
as the quality when none is given, picks the merged file extension of video
streams (`ts`, `flv` and `f4v` parts become `mp4`) and sums part sizes when a
stream has no size. `Data.to_dict()` gives a JSON-serialisable dict.

Extraction problems raise `annie.types.ExtractionError` or its subclasses
`URLParseFailedError` and `LoginRequiredError`. HTTP failures raise
`annie.request.RequestError`.

## Requests

All extractors go through `annie.request`. `set_options` takes an
`annie.request.Options` with `retry_times`, `cookie`, `refer` and `debug`,
applies it to every later request and returns the previous options. With the
default `retry_times` of 0 a request is tried once. A cookie given as
Netscape cookie-file text is turned into a `Cookie` header; any other text is
sent as it is. `get`, `get_bytes`, `headers`, `size` (the `Content-Length`)
and `content_type` (the media type without parameters) cover the common cases.

## Helpers

- `annie.playlist.need_download_list(items, item_start, item_end, length)`
  picks 1-based item numbers from a selection such as `"1-3, 5"`:
  `need_download_list("1-3, 5", 1, 0, 10)` gives `[1, 2, 3, 5]`. Without a
  selection it returns `item_start` to `item_end`, where an end of 0 means the
  whole length. `inclusive_range(low, high)` includes both ends.
- `annie.utils` has file-name cleanup (`file_name`, `file_path`,
  `limit_length`), pattern helpers (`match_one_of`, `match_all`),
  `get_string_from_json` for dotted JSON paths, input-file handling
  (`parse_input_file`, `file_line_counter`), `get_name_and_ext` for URLs,
  `m3u8_urls` for HLS playlists, `file_size`, `domain`, `md5`, `reverse`,
  `item_in_slice` and `print_version`.
- `annie.parser` wraps BeautifulSoup: `get_doc`, `title` (first `h1`, then
  `og:title`, then `title`) and `get_images`.
- `annie.pool.WaitGroupPool(size)` counts running tasks and blocks `add()`
  once `size` are running; `wait()` returns when all are `done()`.
- `annie.ffmpeg.merge_to_mp4` and `merge_files_with_same_extension` join
  downloaded parts with `ffmpeg`, which must be on the `PATH`; they remove the
  parts afterwards and raise `annie.ffmpeg.MergeError` when `ffmpeg` fails.

## What it does not do

The package is a library only. It has no command-line program, it does not
download stream parts itself (no progress display, no chunked or
multi-threaded downloading, no download-manager integration), and it does not
read cookies from a browser. Pass the URLs of the parts it extracts to a
downloader of your choice, then merge them with `annie.ffmpeg` if needed.