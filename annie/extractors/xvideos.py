"""Extractor for xvideos.com."""

from __future__ import annotations

from dataclasses import dataclass

from annie import request, utils
from annie.types import Data, DataType, Extractor, Options, Part, Stream

_SITE = "XVIDEOS xvideos.com"
_LOW_FLAG = "html5player.setVideoUrlLow('"
_LOW_FINAL_FLAG = "');\n\t    html5player.setVideoUrlHigh("
_HIGH_FLAG = "html5player.setVideoUrlHigh('"
_HIGH_FINAL_FLAG = "');\n\t    html5player.setVideoHLS("
QUALITY_LOW = "low"
QUALITY_HIGH = "high"


@dataclass(frozen=True)
class Source:
    """A video address and its quality."""

    url: str
    quality: str


def _between(html: str, start_flag: str, end_flag: str) -> str | None:
    start = html.find(start_flag)
    if start == -1:
        return None
    start += len(start_flag)
    end = html.find(end_flag)
    if end < start:
        return None
    return html[start:end]


def get_src(html: str) -> list[Source]:
    """Return the low and high quality video sources found in the page."""
    sources = []
    for start_flag, end_flag, quality in (
        (_LOW_FLAG, _LOW_FINAL_FLAG, QUALITY_LOW),
        (_HIGH_FLAG, _HIGH_FINAL_FLAG, QUALITY_HIGH),
    ):
        url = _between(html, start_flag, end_flag)
        if url is not None:
            sources.append(Source(url=url, quality=quality))
    return sources


class XvideosExtractor(Extractor):
    """Extracts the low and high quality videos of a page."""

    def extract(self, url: str, options: Options) -> list[Data]:
        html = request.get(url, url, None)
        match = utils.match_one_of(html, r"<title>(.+?)</title>")
        page_title = match[1] if match is not None and len(match) > 1 else "xvideos"

        streams: dict[str, Stream] = {}
        for source in get_src(html):
            size = request.size(source.url, url)
            streams[source.quality] = Stream(
                parts=[Part(url=source.url, size=size, ext="mp4")],
                size=size,
                quality=source.quality,
            )
        return [
            Data(
                site=_SITE,
                title=page_title,
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]