"""Extractor for yinyuetai.com music videos."""

from __future__ import annotations

import json
from typing import Any

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

_SITE = "音悦台 yinyuetai.com"
YINYUETAI_API = "https://ext.yinyuetai.com/main/"
ACTION_GET_MV_INFO = "get-h-mv-info"

_VID_PATTERNS = (
    r"https?://v.yinyuetai.com/video/(\d+)(?:\?vid=\d+)?",
    r"https?://v.yinyuetai.com/video/h5/(\d+)(?:\?vid=\d+)?",
    r"https?://m2.yinyuetai.com/video.html\?id=(\d+)",
)


def gen_api(action: str, param: str) -> str:
    """Return the API address for the action with the query parameter."""
    return f"{YINYUETAI_API}{action}?json=true&{param}"


def _dict_at(document: dict[str, Any], key: str) -> dict[str, Any]:
    value = document.get(key)
    return value if isinstance(value, dict) else {}


class YinyuetaiExtractor(Extractor):
    """Extracts the streams of a yinyuetai music video."""

    def extract(self, url: str, options: Options) -> list[Data]:
        vid = utils.match_one_of(url, *_VID_PATTERNS)
        if vid is None or len(vid) < 2:
            raise ExtractionError("invalid url for yinyuetai")

        api_url = gen_api(ACTION_GET_MV_INFO, f"videoId={vid[1]}")
        body = request.get(api_url, url, None)
        try:
            document = json.loads(body)
        except ValueError as exc:
            raise URLParseFailedError() from exc
        if not isinstance(document, dict):
            raise URLParseFailedError()

        if document.get("error"):
            raise ExtractionError(document.get("message", ""))
        core = _dict_at(_dict_at(document, "videoInfo"), "coreVideoInfo")
        if core.get("error"):
            raise ExtractionError(core.get("errorMsg", ""))

        streams: dict[str, Stream] = {}
        for model in core.get("videoURLModels") or []:
            file_size = int(model.get("fileSize", 0) or 0)
            streams[model.get("qualityLevel", "")] = Stream(
                parts=[Part(url=model.get("videoURL", ""), size=file_size, ext="mp4")],
                size=file_size,
                quality=model.get("qualityLevelName", ""),
            )

        return [
            Data(
                site=_SITE,
                title=core.get("videoName", ""),
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]