import base64
import hashlib
import hmac
import json
import struct
from unittest.mock import patch
from urllib.parse import parse_qs, urlsplit

import pytest
import responses

from annie import request
from annie.extractors.youku import (
    YoukuExtractor,
    gen_streams,
    generate_utdid,
    get_audio_lang,
    hash_code,
)
from annie.types import DataType, ExtractionError, Options, URLParseFailedError

MMSTAT_URL = "http://log.mmstat.com/eg.js"
UPS_URL = "https://ups.youku.com/ups/get.json"
VIDEO_URL = "http://v.youku.com/v_show/id_XMzUzMjE3NDczNg==.html"


@pytest.fixture(autouse=True)
def _request_options():
    request.set_options(request.Options(retry_times=1))
    yield
    request.set_options(request.Options())


@pytest.fixture
def http():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


def _ups_document(show_title="", video_title="车事儿: 智能汽车已经不在遥远 东风风光iX5发布", error=None):
    data = {
        "stream": [
            {
                "size": 22692900,
                "width": 1280,
                "height": 720,
                "stream_type": "mp4hd2v2",
                "audio_lang": "default",
                "segs": [
                    {"size": 11346450, "cdn_url": "http://example.com/v/1.mp4?a=1"},
                    {"size": 11346450, "cdn_url": "http://example.com/v/2.mp4?a=2"},
                ],
            }
        ],
        "video": {"title": video_title},
        "show": {"title": show_title},
    }
    if error is not None:
        data["error"] = error
    return {"data": data}


def _mock_cna(mock):
    utid = "placeholder"
    mock.add(
        responses.GET, MMSTAT_URL, body="", headers={"Set-Cookie": f"cna={utid}; Path=/"}
    )


def test_get_audio_lang():
    assert get_audio_lang("guoyu") == "国语"
    assert get_audio_lang("ja") == "日语"
    assert get_audio_lang("yue") == "粤语"
    assert get_audio_lang("en") == "en"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", 0),
        ("a", 97),
        ("abc", 96354),
        ("hello", 99162322),
        ("polygenelubricants", -2147483648),
    ],
)
def test_hash_code(text, expected):
    assert hash_code(text) == expected


def test_generate_utdid_layout():
    with patch("time.time", return_value=1_600_000_000.0):
        utdid = generate_utdid()
    raw = base64.b64decode(utdid)
    assert len(utdid) == 24
    assert len(raw) == 18
    assert struct.unpack(">i", raw[:4])[0] == 1_600_000_000 - 28800
    assert raw[8:10] == b"\x03\x00"
    digest = hmac.new(
        b"d6fc3a4a06adbde89223bvefedc24fecde188aaa9161", raw[:14], hashlib.sha1
    ).digest()
    assert struct.unpack(">i", raw[14:])[0] == hash_code(base64.b64encode(digest).decode())


def test_gen_streams_default_lang():
    streams = gen_streams(_ups_document()["data"])
    stream = streams["mp4hd2v2"]
    assert stream.quality == "mp4hd2v2 1280x720"
    assert stream.size == 22692900
    assert [part.ext for part in stream.parts] == ["mp4", "mp4"]
    assert stream.parts[1].url == "http://example.com/v/2.mp4?a=2"
    assert stream.parts[0].size == 11346450


def test_gen_streams_other_lang():
    data = {
        "stream": [
            {
                "size": 100,
                "width": 640,
                "height": 360,
                "stream_type": "flvhd",
                "audio_lang": "guoyu",
                "segs": [{"size": 100, "cdn_url": "http://example.com/v/a.flv"}],
            }
        ]
    }
    streams = gen_streams(data)
    assert list(streams) == ["flvhd-guoyu"]
    assert streams["flvhd-guoyu"].quality == "flvhd 640x360 国语"
    assert streams["flvhd-guoyu"].parts[0].ext == "flv"


def test_gen_streams_without_segments():
    data = {"stream": [{"stream_type": "mp4", "audio_lang": "default", "segs": []}]}
    with pytest.raises(URLParseFailedError):
        gen_streams(data)


def test_extract_normal(http):
    _mock_cna(http)
    http.add(responses.GET, UPS_URL, body=json.dumps(_ups_document()))
    data = YoukuExtractor().extract(VIDEO_URL, Options(youku_ccode="0590", youku_ckey="placeholder"))
    item = data[0]
    assert item.title == "车事儿: 智能汽车已经不在遥远 东风风光iX5发布"
    assert item.site == "优酷 youku.com"
    assert item.type == DataType.VIDEO
    assert item.streams["mp4hd2v2"].size == 22692900
    assert item.streams["mp4hd2v2"].quality == "mp4hd2v2 1280x720"
    query = parse_qs(urlsplit(http.calls[1].request.url).query)
    assert query["vid"] == ["XMzUzMjE3NDczNg=="]
    assert query["ccode"] == ["0590"]
    assert query["utid"] == ["placeholder"]
    assert query["ckey"] == ["placeholder"]


def test_extract_title_with_show(http):
    _mock_cna(http)
    http.add(
        responses.GET, UPS_URL, body=json.dumps(_ups_document(show_title="Show", video_title="Episode 1"))
    )
    data = YoukuExtractor().extract(VIDEO_URL, Options(youku_ccode="0590"))
    assert data[0].title == "Show Episode 1"


def test_extract_title_contains_show(http):
    _mock_cna(http)
    http.add(
        responses.GET, UPS_URL, body=json.dumps(_ups_document(show_title="Show", video_title="Show 01"))
    )
    data = YoukuExtractor().extract(VIDEO_URL, Options(youku_ccode="0590"))
    assert data[0].title == "Show 01"


def test_extract_api_error(http):
    _mock_cna(http)
    document = _ups_document(error={"code": -6004, "note": "video is private"})
    http.add(responses.GET, UPS_URL, body=json.dumps(document))
    with pytest.raises(ExtractionError, match="video is private"):
        YoukuExtractor().extract(VIDEO_URL, Options(youku_ccode="0590"))


def test_extract_without_cna_cookie(http):
    http.add(responses.GET, MMSTAT_URL, body="")
    with pytest.raises(URLParseFailedError):
        YoukuExtractor().extract(VIDEO_URL, Options(youku_ccode="0590"))


def test_extract_invalid_url():
    with pytest.raises(URLParseFailedError):
        YoukuExtractor().extract("http://v.youku.com/v_show/", Options())