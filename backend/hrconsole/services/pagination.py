"""Client-side pagination over an already fetched result list."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

from hrconsole.models.listing import PaginationView

T = TypeVar("T")


def total_pages(count: int, page_size: int) -> int:
    if count <= 0:
        return 0
    return math.ceil(count / page_size)


def clamp_page(page: int, pages: int) -> int:
    if pages <= 0:
        return 1
    return max(1, min(page, pages))


def visible_pages(current_page: int, pages: int, max_visible: int = 5) -> list[int]:
    """Page numbers shown in the pager, at most ``max_visible`` of them.

    Near the start the window is pinned to the first pages, near the end to
    the last ones, otherwise it is centred on ``current_page``.
    """
    if pages <= max_visible:
        return list(range(1, pages + 1))

    half = max_visible // 2
    if current_page <= half + 1:
        start = 1
    elif current_page >= pages - half:
        start = pages - max_visible + 1
    else:
        start = current_page - half
    return list(range(start, start + max_visible))


def page_slice(items: Sequence[T], page: int, page_size: int) -> list[T]:
    start = (page - 1) * page_size
    return list(items[start : start + page_size])


def range_label(count: int, page: int, page_size: int, noun: str = "employees") -> str:
    if count <= 0:
        return ""
    first = (page - 1) * page_size + 1
    last = min(page * page_size, count)
    return f"Showing {first} to {last} of {count} {noun}"


def build_pagination(count: int, page: int, page_size: int, max_visible: int = 5) -> PaginationView | None:
    pages = total_pages(count, page_size)
    if pages == 0:
        return None
    page = clamp_page(page, pages)
    return PaginationView(
        current_page=page,
        total_pages=pages,
        visible_pages=visible_pages(page, pages, max_visible),
        has_previous=page > 1,
        has_next=page < pages,
        range_label=range_label(count, page, page_size),
    )
