"""General helpers: pattern matching, file names, input files and URLs."""

from __future__ import annotations

import hashlib
import json
import os
import re
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import IO, Any, Iterable
from urllib.parse import urljoin, urlsplit

from annie import request
from annie.playlist import need_download_list

_BLUE = "\033[34m"
_CYAN = "\033[36m"
_RESET = "\033[0m"

_ELLIPSES = "..."
_CHUNK_SIZE = 32 * 1024

_DOMAIN_PATTERN = (
    r"([a-z0-9][-a-z0-9]{0,62})\."
    r"(com\.cn|com\.hk|"
    r"cn|com|net|edu|gov|biz|org|info|pro|name|xxx|xyz|be|"
    r"me|top|cc|tv|tt)"
)

_FILENAME_REPLACEMENTS = {
    "\n": " ",
    "/": " ",
    "|": "-",
    ": ": "：",
    ":": "：",
    "'": "’",
}
_WINDOWS_REPLACEMENTS = {
    '"': " ",
    "?": " ",
    "*": " ",
    "\\": " ",
    "<": " ",
    ">": " ",
}


def _replacer(table: dict[str, str]):
    pattern = re.compile("|".join(re.escape(key) for key in table))
    return lambda text: pattern.sub(lambda match: table[match.group(0)], text)


_replace_common = _replacer(_FILENAME_REPLACEMENTS)
_replace_windows = _replacer(_WINDOWS_REPLACEMENTS)


def _split_json_path(path: str) -> list[str]:
    keys: list[str] = []
    current: list[str] = []
    escaped = False
    for char in path:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == ".":
            keys.append("".join(current))
            current = []
        else:
            current.append(char)
    keys.append("".join(current))
    return keys


def _json_value_to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return json.dumps(value)
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def get_string_from_json(json_text: str, path: str) -> str:
    """Return the value at a dotted path in a JSON document as a string, or ""."""
    try:
        value: Any = json.loads(json_text)
    except ValueError:
        return ""
    for key in _split_json_path(path):
        if isinstance(value, dict):
            if key not in value:
                return ""
            value = value[key]
        elif isinstance(value, list):
            if key == "#":
                value = len(value)
            elif key.isdigit() and int(key) < len(value):
                value = value[int(key)]
            else:
                return ""
        else:
            return ""
    return _json_value_to_string(value)


def _submatches(match: re.Match) -> list[str]:
    return [match.group(0)] + [group or "" for group in match.groups()]


def match_one_of(text: str, *args: str) -> list[str] | None:
    """Return the whole match and groups of the first pattern that matches, or None."""
    for pattern in args:
        match = re.search(pattern, text)
        if match is not None:
            return _submatches(match)
    return None


def match_all(text: str, pattern: str) -> list[list[str]]:
    """Return the whole match and groups of every match of the pattern."""
    return [_submatches(match) for match in re.finditer(pattern, text)]


def file_size(file_path: str | os.PathLike) -> tuple[int, bool]:
    """Return the size of the file and whether it exists."""
    try:
        return os.stat(file_path).st_size, True
    except FileNotFoundError:
        return 0, False


def domain(url: str) -> str:
    """Return the second-level domain name in the URL, or ""."""
    match = match_one_of(url, _DOMAIN_PATTERN)
    return match[1] if match is not None else ""


def limit_length(s: str, length: int) -> str:
    """Shorten the string to the length, ending it with an ellipsis; 0 means no limit."""
    if length == 0 or len(s) <= length:
        return s
    cut = length - len(_ELLIPSES)
    if cut < 0:
        raise ValueError(f"length {length} is too short to hold an ellipsis")
    return s[:cut] + _ELLIPSES


def file_name(name: str, ext: str, length: int) -> str:
    """Turn a string into a valid file name with the extension."""
    name = _replace_common(name)
    if sys.platform == "win32":
        name = _replace_windows(name)
    limited = limit_length(name, length)
    if not ext:
        return limited
    return f"{limited}.{ext}"


def file_path(name: str, ext: str, length: int, output_path: str, escape: bool) -> str:
    """Return the path of the output file; the output directory must exist."""
    if output_path:
        os.stat(output_path)
    name_part = file_name(name, ext, length) if escape else f"{name}.{ext}"
    if not output_path:
        return name_part
    return os.path.normpath(os.path.join(output_path, name_part))


def file_line_counter(reader: IO) -> int:
    """Count the newline characters read from the stream."""
    count = 0
    while True:
        chunk = reader.read(_CHUNK_SIZE)
        if not chunk:
            return count
        count += chunk.count(b"\n" if isinstance(chunk, bytes) else "\n")


def parse_input_file(reader: IO, items: str, item_start: int, item_end: int) -> list[str]:
    """Return the wanted lines of an input file, stripped of surrounding space."""
    data = reader.read()
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    lines = data.split("\n")
    if lines[-1] == "":
        lines.pop()
    entries = [line.strip() for line in lines]
    wanted = set(need_download_list(items, item_start, item_end, len(entries)))
    return [entry for index, entry in enumerate(entries) if index in wanted]


def item_in_slice(item: Any, items: Iterable[Any]) -> bool:
    """Return whether an element of the same type and value is in the sequence."""
    return any(type(element) is type(item) and element == item for element in items)


def get_name_and_ext(uri: str) -> tuple[str, str]:
    """Return the file name and extension of the URL, asking the server if needed."""
    parts = urlsplit(uri)
    if not parts.scheme and not parts.path.startswith("/"):
        raise ValueError(f"invalid URI for request: {uri}")
    filename = parts.path.split("/")[-1].split(".")
    if len(filename) > 1:
        return filename[0], filename[1]
    media_type = request.content_type(uri, uri)
    pieces = media_type.split("/")
    if len(pieces) < 2:
        raise ValueError(f"no file extension in Content-Type {media_type!r}")
    return filename[0], pieces[1]


def md5(text: str) -> str:
    """Return the hex MD5 digest of the text."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def m3u8_urls(uri: str) -> list[str]:
    """Return the media URLs listed in an m3u8 playlist."""
    if not uri:
        raise ValueError("url is null")
    body = request.get(uri, "", None)
    urls = []
    for line in body.split("\n"):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        urls.append(line if line.startswith("http") else urljoin(uri, line))
    return urls


def _package_version() -> str:
    try:
        return version("annie")
    except PackageNotFoundError:
        return "unknown"


def _version_banner() -> str:
    return (
        f"\n{_CYAN}annie{_RESET}: version {_BLUE}{_package_version()}{_RESET}, "
        "A fast, simple and clean video downloader.\n\n"
    )


def print_version() -> str:
    """Write the program name and version to standard output and return that text."""
    banner = _version_banner()
    sys.stdout.write(banner)
    sys.stdout.flush()
    return banner


def reverse(s: str) -> str:
    """Return the string with its characters in reverse order."""
    return s[::-1]