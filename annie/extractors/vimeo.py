"""Extractor for vimeo.com."""

from __future__ import annotations

import json

from annie import request, utils
from annie.types import (
    Data,
    DataType,
    Extractor,
    Options,
    Part,
    Stream,
    URLParseFailedError,
)

_SITE = "Vimeo vimeo.com"
_CONFIG_PATTERN = r"var \w+\s?=\s?({.+?});"


def _section(document: dict, *keys: str) -> dict:
    for key in keys:
        value = document.get(key)
        if not isinstance(value, dict):
            return {}
        document = value
    return document


class VimeoExtractor(Extractor):
    """Extracts the progressive streams of a vimeo video."""

    def extract(self, url: str, options: Options) -> list[Data]:
        if "player.vimeo.com" in url:
            html = request.get(url, url, None)
        else:
            vid = utils.match_one_of(url, r"vimeo\.com/(\d+)")
            if vid is None or len(vid) < 2:
                raise URLParseFailedError()
            html = request.get("https://player.vimeo.com/video/" + vid[1], url, None)

        match = utils.match_one_of(html, _CONFIG_PATTERN)
        if match is None or len(match) < 2:
            raise URLParseFailedError()
        config = json.loads(match[1])
        if not isinstance(config, dict):
            raise URLParseFailedError()

        streams: dict[str, Stream] = {}
        for video in _section(config, "request", "files").get("progressive") or []:
            video_url = video.get("url", "")
            size = request.size(video_url, url)
            streams[str(video.get("profile", 0))] = Stream(
                parts=[Part(url=video_url, size=size, ext="mp4")],
                size=size,
                quality=video.get("quality", ""),
            )

        return [
            Data(
                site=_SITE,
                title=_section(config, "video").get("title", ""),
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]