"""Extractor for tumblr.com posts holding images or videos."""

from __future__ import annotations

import json

from annie import parser, request, utils
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

_SITE = "Tumblr tumblr.com"
_LD_JSON_PATTERN = r'<script type="application/ld\+json">\s*(.+?)</script>'
_IFRAME_PATTERN = r"<iframe src='(.+?)'"
_SOURCE_PATTERN = r'source src="(.+?)"'


def _gen_part(url: str, referer: str) -> Part:
    size = request.size(url, referer)
    _, ext = utils.get_name_and_ext(url)
    return Part(url=url, size=size, ext=ext)


def _image_urls(json_string: str) -> list[str]:
    document = json.loads(json_string)
    if not isinstance(document, dict):
        raise URLParseFailedError()
    image = document.get("image", "")
    # The image field holds either a list object or a single URL.
    if '"image":{"@list"' in json_string:
        if not isinstance(image, dict):
            raise URLParseFailedError()
        urls = image.get("@list") or []
        if not isinstance(urls, list):
            raise URLParseFailedError()
        return [str(url) for url in urls]
    if not isinstance(image, str):
        raise URLParseFailedError()
    return [image]


def _image_data(url: str, html: str, page_title: str) -> list[Data]:
    match = utils.match_one_of(html, _LD_JSON_PATTERN)
    if match is None or len(match) < 2:
        raise URLParseFailedError()
    parts = [_gen_part(image_url, url) for image_url in _image_urls(match[1])]
    stream = Stream(parts=parts, size=sum(part.size for part in parts))
    return [
        Data(
            site=_SITE,
            title=page_title,
            type=DataType.IMAGE,
            streams={"default": stream},
            url=url,
        )
    ]


def _video_data(url: str, html: str, page_title: str) -> list[Data]:
    match = utils.match_one_of(html, _IFRAME_PATTERN)
    if match is None or len(match) < 2:
        raise URLParseFailedError()
    video_url = match[1]
    if "tumblr.com/video" not in video_url:
        raise ExtractionError("annie doesn't support this URL right now")

    video_html = request.get(video_url, url, None)
    real = utils.match_one_of(video_html, _SOURCE_PATTERN)
    if real is None or len(real) < 2:
        raise URLParseFailedError()

    part = _gen_part(real[1], url)
    stream = Stream(parts=[part], size=part.size)
    return [
        Data(
            site=_SITE,
            title=page_title,
            type=DataType.VIDEO,
            streams={"default": stream},
            url=url,
        )
    ]


class TumblrExtractor(Extractor):
    """Extracts images and videos from tumblr posts."""

    def extract(self, url: str, options: Options) -> list[Data]:
        html = request.get(url, url, None)
        page_title = parser.title(parser.get_doc(html))
        if "<iframe src=" in html:
            return _video_data(url, html, page_title)
        return _image_data(url, html, page_title)