"""HTTP helpers with shared options and retries."""

from __future__ import annotations

import time
import warnings
from contextlib import closing
from dataclasses import dataclass, field, replace

import requests
from requests.structures import CaseInsensitiveDict

_BLUE = "\033[34m"
_RED = "\033[31m"
_GREEN = "\033[32m"
_RESET = "\033[0m"


class RequestError(Exception):
    """An HTTP request failed."""


@dataclass
class Options:
    """Options shared by every request."""

    retry_times: int = 0
    cookie: str = ""
    refer: str = ""
    debug: bool = False


@dataclass
class _State:
    options: Options = field(default_factory=Options)


_state = _State()


def set_options(options: Options) -> Options:
    """Use a copy of the options for every later request; return the previous ones."""
    previous = _state.options
    _state.options = replace(options)
    return previous


def _parse_cookie_file(raw: str) -> list[tuple[str, str]]:
    """Parse Netscape cookie-file text; return no cookies if it is not in that form."""
    cookies = []
    for line in raw.splitlines():
        line = line.strip()
        if line.startswith("#HttpOnly_"):
            line = line[len("#HttpOnly_"):]
        elif not line or line.startswith("#"):
            continue
        fields = line.split("\t")
        if len(fields) != 7:
            return []
        cookies.append((fields[5], fields[6]))
    return cookies


def _print_debug(url: str, method: str, headers: dict[str, str], status: int) -> None:
    print()
    print(f"{_BLUE}URL:         {_RESET}{url}")
    print(f"{_BLUE}Method:      {_RESET}{method}")
    print(f"{_BLUE}Headers:     {_RESET}{headers!r}")
    colour = _RED if status >= 400 else _GREEN
    print(f"{_BLUE}Status Code: {_RESET}{colour}{status}{_RESET}")


def request(method: str, url: str, body=None, headers: dict[str, str] | None = None) -> requests.Response:
    """Send a request, retrying failures, and return the streamed response."""
    opts = _state.options
    sent = dict(headers or {})
    if "Referer" not in sent:
        sent["Referer"] = url
    if opts.cookie:
        cookies = _parse_cookie_file(opts.cookie)
        if cookies:
            pairs = "; ".join(f"{name}={value}" for name, value in cookies)
            existing = sent.get("Cookie")
            sent["Cookie"] = f"{existing}; {pairs}" if existing else pairs
        else:
            sent["Cookie"] = opts.cookie
    if opts.refer:
        sent["Referer"] = opts.refer

    attempt = 0
    while True:
        response = None
        error = None
        try:
            with warnings.catch_warnings():
                warnings.filterwarnings("ignore", message="Unverified HTTPS request")
                response = requests.request(
                    method,
                    url,
                    data=body,
                    headers=sent,
                    timeout=(10, 900),
                    verify=False,
                    stream=True,
                )
        except requests.RequestException as exc:
            error = exc
        if response is not None and response.status_code < 400:
            break
        if response is not None:
            response.close()
        if attempt + 1 >= opts.retry_times:
            if error is not None:
                raise RequestError(f"request error: {error}") from error
            raise RequestError(f"{url} request error: HTTP {response.status_code}")
        time.sleep(1)
        attempt += 1

    if opts.debug:
        _print_debug(url, method, sent, response.status_code)
    return response


def get(url: str, refer: str = "", headers: dict[str, str] | None = None) -> str:
    """GET the URL and return the body as text."""
    return get_bytes(url, refer, headers).decode("utf-8", errors="replace")


def get_bytes(url: str, refer: str = "", headers: dict[str, str] | None = None) -> bytes:
    """GET the URL and return the decoded body."""
    sent = dict(headers or {})
    if refer:
        sent["Referer"] = refer
    response = request("GET", url, None, sent)
    with closing(response):
        try:
            return response.content
        except requests.RequestException as exc:
            raise RequestError(f"request error: {exc}") from exc


def headers(url: str, refer: str = "") -> CaseInsensitiveDict:
    """Return the response headers of the URL."""
    response = request("GET", url, None, {"Referer": refer})
    with closing(response):
        return response.headers


def size(url: str, refer: str = "") -> int:
    """Return the Content-Length of the URL."""
    value = headers(url, refer).get("Content-Length", "")
    if not value:
        raise RequestError("Content-Length is not present")
    try:
        return int(value)
    except ValueError as exc:
        raise RequestError(f"invalid Content-Length: {value}") from exc


def content_type(url: str, refer: str = "") -> str:
    """Return the media type of the URL, without parameters."""
    return headers(url, refer).get("Content-Type", "").split(";")[0]