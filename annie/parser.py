"""HTML helpers."""

from __future__ import annotations

from typing import Callable

from bs4 import BeautifulSoup


def get_doc(html: str) -> BeautifulSoup:
    """Parse an HTML string into a document."""
    return BeautifulSoup(html, "html.parser")


def get_images(
    html: str,
    img_class: str,
    url_handler: Callable[[str], str] | None = None,
) -> tuple[str, list[str]]:
    """Return the page title and the sources of the images with the given class."""
    doc = get_doc(html)
    page_title = title(doc)
    urls = []
    for img in doc.find_all("img"):
        classes = img.get("class")
        if classes is None:
            continue
        joined = classes if isinstance(classes, str) else " ".join(classes)
        if joined != img_class:
            continue
        url = img.get("src", "")
        if url_handler is not None:
            url = url_handler(url)
        urls.append(url)
    return page_title, urls


def title(doc: BeautifulSoup) -> str:
    """Return the page title: the first h1, then og:title, then the title tag."""
    heading = doc.find("h1")
    result = heading.get_text().strip().replace("\n", "") if heading is not None else ""
    if not result:
        meta = doc.find("meta", attrs={"property": "og:title"})
        if meta is not None:
            result = meta.get("content", "")
    if not result:
        result = "".join(tag.get_text() for tag in doc.find_all("title"))
    return result