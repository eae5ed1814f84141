import pytest
import responses

from annie import request
from annie.extractors.udn import UdnExtractor, get_cdn_url, prepare_embed_url
from annie.types import DataType, ExtractionError, Options

EMBED_URL = "https://video.udn.com/embed/news/300040"
TITLE = '生物老師男變女 全校挺"做自己"'
PAGE = (
    "var options = {\n"
    f"        title: '{TITLE}',\n"
    "        link: 'https://video.udn.com/news/300040',\n"
    "        mp4s: {\n"
    "            hd: '',\n"
    "            mp4: '//video.udn.com/api/src/300040'\n"
    "        },\n"
    "        subtitles: []\n"
    "};"
)


@pytest.fixture(autouse=True)
def _request_options():
    request.set_options(request.Options(retry_times=1))
    yield
    request.set_options(request.Options())


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def test_prepare_embed_url_keeps_embed_url():
    assert prepare_embed_url(EMBED_URL) == EMBED_URL


def test_prepare_embed_url_from_news_url():
    assert prepare_embed_url("https://video.udn.com/news/300040") == EMBED_URL


def test_get_cdn_url():
    assert get_cdn_url(PAGE) == "video.udn.com/api/src/300040"


def test_get_cdn_url_missing():
    assert get_cdn_url("no video here") == ""


def test_extract(mocked):
    mocked.add(responses.GET, EMBED_URL, body=PAGE)
    mocked.add(
        responses.GET,
        "http://video.udn.com/api/src/300040",
        body="https://cdn.udn.com/300040.mp4",
    )
    mocked.add(
        responses.GET,
        "https://cdn.udn.com/300040.mp4",
        headers={"Content-Length": "12740874"},
    )

    data = UdnExtractor().extract(EMBED_URL, Options())

    assert len(data) == 1
    assert data[0].title == TITLE
    assert data[0].type == DataType.VIDEO
    assert data[0].url == EMBED_URL
    stream = data[0].streams["normal"]
    assert stream.size == 12740874
    assert stream.quality == "normal"
    assert stream.parts[0].url == "https://cdn.udn.com/300040.mp4"
    assert stream.parts[0].ext == "mp4"


def test_extract_without_source(mocked):
    mocked.add(responses.GET, EMBED_URL, body="title: 'x'")

    with pytest.raises(ExtractionError, match="empty list"):
        UdnExtractor().extract(EMBED_URL, Options())