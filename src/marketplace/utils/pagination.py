"""Pagination helpers over Protean query sets."""

import math
from dataclasses import dataclass, field

from marketplace.config import get_settings

_BATCH_SIZE = 100


@dataclass
class Page:
    items: list = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def to_dict(self) -> dict:
        return {
            "currentPage": self.page,
            "totalPages": self.total_pages,
            "totalItems": self.total,
            "hasNext": self.page < self.total_pages,
            "hasPrev": self.page > 1,
        }


def normalize(page: int | None, limit: int | None) -> tuple[int, int]:
    """Clamp page/limit query parameters to sane values."""
    settings = get_settings()
    page = page if page and page > 0 else 1
    limit = limit if limit and limit > 0 else settings.default_page_size
    return page, min(limit, settings.max_page_size)


def paginate(queryset, page: int | None = None, limit: int | None = None) -> Page:
    page, limit = normalize(page, limit)
    result = queryset.offset((page - 1) * limit).limit(limit).all()
    return Page(items=list(result.items), page=page, limit=limit, total=result.total)


def fetch_all(queryset) -> list:
    """Return every record matched by ``queryset``, reading in batches.

    Query sets cap results at a default page size, so full scans walk offsets
    until a short batch comes back.
    """
    items = []
    offset = 0
    while True:
        batch = queryset.offset(offset).limit(_BATCH_SIZE).all().items
        items.extend(batch)
        if len(batch) < _BATCH_SIZE:
            return items
        offset += _BATCH_SIZE
