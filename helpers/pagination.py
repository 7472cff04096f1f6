"""In-memory pagination over cached record lists."""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Pagination:
    current: int
    total: int
    total_items: int
    has_next: bool
    has_prev: bool


@dataclass
class Page(Generic[T]):
    data: list[T] = field(default_factory=list)
    pagination: Pagination | None = None


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """Slice `items` into 1-based pages. A non-positive page size means one page."""
    if page_size <= 0:
        return single_page(items)
    page = max(page, 1)
    start = (page - 1) * page_size
    return Page(
        data=list(items[start : start + page_size]),
        pagination=Pagination(
            current=page,
            total=math.ceil(len(items) / page_size),
            total_items=len(items),
            has_next=start + page_size < len(items),
            has_prev=page > 1,
        ),
    )


def single_page(items: Sequence[T]) -> Page[T]:
    """Everything on one page (fetch_all mode)."""
    return Page(
        data=list(items),
        pagination=Pagination(current=1, total=1, total_items=len(items), has_next=False, has_prev=False),
    )
