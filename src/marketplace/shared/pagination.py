"""Page-number pagination over an already filtered and sorted list."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Page:
    items: list
    total: int
    page: int
    pages: int
    limit: int

    @property
    def count(self) -> int:
        return len(self.items)


def paginate(items, page=1, limit=10, max_limit=100) -> Page:
    """Slice ``items`` into one page.

    ``page`` is 1-based and clamped to at least 1; ``limit`` is clamped into
    ``1..max_limit``. A page past the end comes back empty.
    """
    page = max(int(page or 1), 1)
    limit = min(max(int(limit or 1), 1), max_limit)
    total = len(items)
    start = (page - 1) * limit
    return Page(
        items=list(items[start : start + limit]),
        total=total,
        page=page,
        pages=math.ceil(total / limit),
        limit=limit,
    )
