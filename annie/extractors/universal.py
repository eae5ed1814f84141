"""Extractor for direct links to any file."""

from __future__ import annotations

from annie import request, utils
from annie.types import Data, DataType, Extractor, Options, Part, Stream


def _data_type(media_type: str) -> DataType | str:
    try:
        return DataType(media_type)
    except ValueError:
        return media_type


class UniversalExtractor(Extractor):
    """Treats the URL itself as the file to download."""

    def extract(self, url: str, options: Options) -> list[Data]:
        filename, ext = utils.get_name_and_ext(url)
        size = request.size(url, url)
        stream = Stream(parts=[Part(url=url, size=size, ext=ext)], size=size)
        media_type = request.content_type(url, url)
        return [
            Data(
                site="Universal",
                title=filename,
                type=_data_type(media_type),
                streams={"default": stream},
                url=url,
            )
        ]