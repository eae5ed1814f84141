"""Extractor for youku.com videos."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import random
import struct
import time
from typing import Any
from urllib.parse import quote_plus

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

_SITE = "优酷 youku.com"
YOUKU_REFERER = "https://v.youku.com"
_UTDID_CCODE = "0103010102"
_UTDID_HMAC_KEY = b"d6fc3a4a06adbde89223bvefedc24fecde188aaa9161"

_AUDIO_LANGS = {
    "guoyu": "国语",
    "ja": "日语",
    "yue": "粤语",
}


def get_audio_lang(lang: str) -> str:
    """Return the display name of an audio language code, or the code itself."""
    return _AUDIO_LANGS.get(lang, lang)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def _int32_bytes(value: int) -> bytes:
    return struct.pack(">i", _to_int32(value))


def hash_code(s: str) -> int:
    """Return the 32-bit signed string hash with multiplier 31."""
    result = 0
    for char in s:
        result = _to_int32(result * 0x1F + ord(char))
    return result


def generate_utdid() -> str:
    """Return a freshly generated device identifier in base64."""
    timestamp = _to_int32(int(time.time()))
    buffer = bytearray()
    buffer += _int32_bytes(timestamp - 60 * 60 * 8)
    buffer += _int32_bytes(random.getrandbits(31))
    buffer += b"\x03\x00"
    imei = str(random.getrandbits(31))
    buffer += _int32_bytes(hash_code(imei))
    digest = hmac.new(_UTDID_HMAC_KEY, bytes(buffer), hashlib.sha1).digest()
    buffer += _int32_bytes(hash_code(base64.b64encode(digest).decode("ascii")))
    return base64.b64encode(bytes(buffer)).decode("ascii")


def gen_streams(data: dict[str, Any]) -> dict[str, Stream]:
    """Build the streams from the "data" section of an ups response."""
    streams: dict[str, Stream] = {}
    for entry in data.get("stream") or []:
        stream_type = entry.get("stream_type", "")
        width = entry.get("width", 0)
        height = entry.get("height", 0)
        audio_lang = entry.get("audio_lang", "")
        if audio_lang == "default":
            key = stream_type
            quality = f"{stream_type} {width}x{height}"
        else:
            key = f"{stream_type}-{audio_lang}"
            quality = f"{stream_type} {width}x{height} {get_audio_lang(audio_lang)}"

        segs = entry.get("segs") or []
        if not segs:
            raise URLParseFailedError()
        ext = segs[0].get("cdn_url", "").split("?")[0].split(".")[-1]
        parts = [
            Part(url=seg.get("cdn_url", ""), size=int(seg.get("size", 0) or 0), ext=ext)
            for seg in segs
        ]
        streams[key] = Stream(
            parts=parts,
            size=int(entry.get("size", 0) or 0),
            quality=quality,
        )
    return streams


def _find_utid(options: Options) -> str:
    if "cna" in options.cookie:
        match = utils.match_one_of(
            options.cookie, r"cna=(.+?);", r"cna\s+(.+?)\s", r"cna\s+(.+?)$"
        )
    else:
        response_headers = request.headers("http://log.mmstat.com/eg.js", YOUKU_REFERER)
        match = utils.match_one_of(response_headers.get("Set-Cookie", ""), r"cna=(.+?);")
    if match is None or len(match) < 2:
        raise URLParseFailedError()
    return match[1]


def _youku_ups(vid: str, options: Options) -> dict[str, Any]:
    utid = _find_utid(options)
    document: dict[str, Any] = {}
    for ccode in (options.youku_ccode,):
        if ccode == _UTDID_CCODE:
            utid = generate_utdid()
        url = (
            f"https://ups.youku.com/ups/get.json?vid={vid}&ccode={ccode}"
            f"&client_ip=192.168.1.1&client_ts={int(time.time()) // 1000}"
            f"&utid={quote_plus(utid, safe='')}&ckey={quote_plus(options.youku_ckey, safe='')}"
        )
        if options.youku_password:
            url = f"{url}&password={options.youku_password}"
        body = request.get_bytes(url, YOUKU_REFERER, None)
        parsed = json.loads(body)
        document = parsed if isinstance(parsed, dict) else {}
        data = document.get("data")
        error = data.get("error") if isinstance(data, dict) else None
        if not error:
            return document
    return document


def _section(document: dict[str, Any], key: str) -> dict[str, Any]:
    value = document.get(key)
    return value if isinstance(value, dict) else {}


class YoukuExtractor(Extractor):
    """Extracts the streams of a youku video."""

    def extract(self, url: str, options: Options) -> list[Data]:
        vids = utils.match_one_of(url, r"id_(.+?)\.html", r"id_(.+)")
        if vids is None or len(vids) < 2:
            raise URLParseFailedError()

        document = _youku_ups(vids[1], options)
        data = _section(document, "data")
        error = _section(data, "error")
        if error.get("code", 0) != 0:
            raise ExtractionError(error.get("note", ""))

        streams = gen_streams(data)
        video_title = _section(data, "video").get("title", "")
        show_title = _section(data, "show").get("title", "")
        if not show_title or show_title in video_title:
            page_title = video_title
        else:
            page_title = f"{show_title} {video_title}"

        return [
            Data(
                site=_SITE,
                title=page_title,
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]