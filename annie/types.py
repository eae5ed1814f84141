"""Data structures shared by all extractors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ExtractionError(Exception):
    """Base class for errors raised while extracting data."""


class URLParseFailedError(ExtractionError):
    """The page at the URL could not be parsed."""

    def __init__(self, message: str = "url parse failed") -> None:
        super().__init__(message)


class LoginRequiredError(ExtractionError):
    """The content needs a logged-in session."""

    def __init__(self, message: str = "login required") -> None:
        super().__init__(message)


class DataType(str, Enum):
    """Kind of extracted data."""

    VIDEO = "video"
    IMAGE = "image"


# Parts in these formats are merged into an mp4 file.
_MERGE_TO_MP4 = frozenset({"ts", "flv", "f4v"})


@dataclass
class Part:
    """A single downloadable piece of a stream."""

    url: str = ""
    size: int = 0
    ext: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "size": self.size, "ext": self.ext}


@dataclass
class Stream:
    """One quality variant of the media, made of one or more parts."""

    id: str = ""
    quality: str = ""
    parts: list[Part] = field(default_factory=list)
    size: int = 0
    ext: str = ""
    need_mux: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "quality": self.quality,
            "parts": [part.to_dict() for part in self.parts],
            "size": self.size,
            "ext": self.ext,
            "NeedMux": self.need_mux,
        }


@dataclass
class Data:
    """Everything extracted from one URL."""

    url: str = ""
    site: str = ""
    title: str = ""
    type: DataType | str = ""
    streams: dict[str, Stream] = field(default_factory=dict)
    caption: Part | None = None
    err: Exception | None = None

    def fill_up_streams_data(self) -> None:
        """Fill in stream ids, default qualities, merged extensions and sizes."""
        for stream_id, stream in self.streams.items():
            stream.id = stream_id
            if not stream.quality:
                stream.quality = stream_id

            if self.type == DataType.VIDEO and not stream.ext:
                ext = stream.parts[0].ext
                stream.ext = "mp4" if ext in _MERGE_TO_MP4 else ext

            if stream.size > 0:
                continue
            stream.size = sum(part.size for part in stream.parts)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable representation."""
        type_value = self.type.value if isinstance(self.type, DataType) else self.type
        return {
            "url": self.url,
            "site": self.site,
            "title": self.title,
            "type": type_value,
            "streams": {key: stream.to_dict() for key, stream in self.streams.items()},
            "caption": self.caption.to_dict() if self.caption is not None else None,
            "err": str(self.err) if self.err is not None else None,
        }


def empty_data(url: str, err: Exception) -> Data:
    """Return a Data that only records the URL and the error it hit."""
    return Data(url=url, err=err)


@dataclass
class Options:
    """Options that extractors may use."""

    playlist: bool = False
    items: str = ""
    item_start: int = 0
    item_end: int = 0
    thread_number: int = 0
    cookie: str = ""
    episode_title_only: bool = False
    youku_ccode: str = ""
    youku_ckey: str = ""
    youku_password: str = ""


class Extractor(ABC):
    """Extracts media data from a URL."""

    @abstractmethod
    def extract(self, url: str, options: Options) -> list[Data]:
        """Extract the data for the URL."""