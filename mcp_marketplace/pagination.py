"""Page clamping, slicing and compact navigation windows."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any, TypeVar

from .config import PAGE_SIZE, PAGE_WINDOW
from .models import PageItem, PageWindow

T = TypeVar("T")

ELLIPSIS = "ellipsis"


def _coerce_int(value: Any, default: int) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return int(number)


def page_count(total: int, page_size: int = PAGE_SIZE) -> int:
    """Number of pages for ``total`` items; never less than 1."""
    size = max(1, _coerce_int(page_size, PAGE_SIZE))
    return max(1, math.ceil(max(0, total) / size))


def clamp_page(requested: Any, total_pages: int) -> int:
    """Clamp a requested page number into ``[1, total_pages]``.

    Non-numeric, infinite or missing values fall back to page 1.
    """
    page = _coerce_int(requested, 1)
    return max(1, min(total_pages, page))


def build_page_items(current: int, total_pages: int, window: int = PAGE_WINDOW) -> list[PageItem]:
    """Compact list of page numbers and ellipsis markers for navigation.

    The first and last pages are always present, together with up to
    ``window`` pages around ``current``. Gaps collapse into one marker.
    """
    window = max(1, window)
    if total_pages <= window + 2:
        return list(range(1, total_pages + 1))

    half = window // 2
    start = max(2, current - half)
    end = min(total_pages - 1, start + window - 1)

    if end == total_pages - 1:
        start = max(2, end - window + 1)

    items: list[PageItem] = [1]
    if start > 2:
        items.append(ELLIPSIS)
    items.extend(range(start, end + 1))
    if end < total_pages - 1:
        items.append(ELLIPSIS)
    items.append(total_pages)
    return items


def paginate(
    total: int,
    page_size: int = PAGE_SIZE,
    requested: Any = 1,
    window: int = PAGE_WINDOW,
) -> PageWindow:
    """Pagination descriptor for ``total`` items.

    Args:
        total: Number of items to page through
        page_size: Items per page
        requested: Requested page number, clamped silently
        window: Number of pages shown around the current page

    Returns:
        PageWindow with the clamped page, page count and navigation items
    """
    pages = page_count(total, page_size)
    current = clamp_page(requested, pages)
    return PageWindow(
        current_page=current,
        total_pages=pages,
        items=build_page_items(current, pages, window),
    )


def slice_page(items: Sequence[T], page: int, page_size: int = PAGE_SIZE) -> list[T]:
    """Items belonging to ``page`` (1-based)."""
    size = max(1, _coerce_int(page_size, PAGE_SIZE))
    start = (max(1, page) - 1) * size
    return list(items[start : start + size])
