import json

import pytest

from annie.types import (
    Data,
    DataType,
    ExtractionError,
    Extractor,
    LoginRequiredError,
    Options,
    Part,
    Stream,
    URLParseFailedError,
    empty_data,
)


def test_fill_up_sets_id_quality_and_size():
    first = Part(url="a", size=3, ext="mp4")
    second = Part(url="b", size=4, ext="mp4")
    data = Data(type=DataType.VIDEO, streams={"hd": Stream(parts=[first, second])})
    data.fill_up_streams_data()
    stream = data.streams["hd"]
    assert stream.id == "hd"
    assert stream.quality == "hd"
    assert stream.size == first.size + second.size
    assert stream.ext == "mp4"


@pytest.mark.parametrize("ext", ["ts", "flv", "f4v"])
def test_fill_up_merges_segment_formats_to_mp4(ext):
    data = Data(type=DataType.VIDEO, streams={"s": Stream(parts=[Part(ext=ext)])})
    data.fill_up_streams_data()
    assert data.streams["s"].ext == "mp4"


def test_fill_up_keeps_other_extension():
    data = Data(type=DataType.VIDEO, streams={"s": Stream(parts=[Part(ext="webm")])})
    data.fill_up_streams_data()
    assert data.streams["s"].ext == "webm"


def test_fill_up_keeps_given_values():
    stream = Stream(quality="normal", size=12740874, ext="mkv", parts=[Part(size=1, ext="ts")])
    data = Data(type=DataType.VIDEO, streams={"x": stream})
    data.fill_up_streams_data()
    assert stream.quality == "normal"
    assert stream.size == 12740874
    assert stream.ext == "mkv"


def test_fill_up_image_leaves_extension_empty():
    data = Data(type=DataType.IMAGE, streams={"default": Stream(parts=[Part(ext="jpg", size=5)])})
    data.fill_up_streams_data()
    assert data.streams["default"].ext == ""
    assert data.streams["default"].size == 5


def test_empty_data_records_url_and_error():
    err = URLParseFailedError()
    data = empty_data("https://example.com/v", err)
    assert data.url == "https://example.com/v"
    assert data.err is err
    assert data.streams == {}


def test_error_messages():
    assert str(URLParseFailedError()) == "url parse failed"
    assert str(LoginRequiredError()) == "login required"
    assert isinstance(LoginRequiredError(), ExtractionError)


def test_to_dict_is_json_serialisable():
    data = Data(
        url="https://example.com/v",
        site="Site",
        title="t",
        type=DataType.VIDEO,
        streams={"hd": Stream(id="hd", parts=[Part(url="u", size=2, ext="mp4")], size=2)},
        err=URLParseFailedError(),
    )
    loaded = json.loads(json.dumps(data.to_dict()))
    assert loaded["type"] == "video"
    assert loaded["streams"]["hd"]["parts"][0]["url"] == "u"
    assert loaded["err"] == "url parse failed"
    assert loaded["caption"] is None


def test_to_dict_keeps_plain_string_type():
    data = Data(type="image/jpeg")
    assert data.to_dict()["type"] == "image/jpeg"


def test_extractor_requires_extract():
    with pytest.raises(TypeError):
        Extractor()


def test_extractor_subclass_works():
    class Fixed(Extractor):
        def extract(self, url, options):
            return [empty_data(url, LoginRequiredError())]

    result = Fixed().extract("https://example.com/x", Options())
    assert result[0].url == "https://example.com/x"
    assert isinstance(result[0].err, LoginRequiredError)