"""Selection of playlist or input-file items."""

from __future__ import annotations

import re

_INT_RE = re.compile(r"[+-]?\d+")


def _to_int(text: str) -> int:
    text = text.strip()
    return int(text) if _INT_RE.fullmatch(text) else 0


def need_download_list(items: str, item_start: int, item_end: int, length: int) -> list[int]:
    """Return the 1-based indices of the items that should be downloaded."""
    if items:
        selected: list[int] = []
        for selection in items.split(","):
            bounds = selection.split("-")
            start = _to_int(bounds[0])
            end = _to_int(bounds[1]) if len(bounds) >= 2 else start
            selected.extend(range(start, end + 1))
        return selected

    item_start = max(item_start, 1)
    if item_end == 0:
        item_end = length
    item_end = max(item_end, item_start)
    return inclusive_range(item_start, item_end)


def inclusive_range(low: int, high: int) -> list[int]:
    """Return the integers from low to high, both included."""
    return list(range(low, high + 1))