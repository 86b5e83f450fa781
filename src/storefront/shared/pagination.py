"""Offset pagination over in-memory result lists."""

import math
from dataclasses import dataclass, field


@dataclass
class Page:
    items: list = field(default_factory=list)
    page: int = 1
    per_page: int = 12
    total_count: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.per_page) if self.per_page else 0

    def to_dict(self) -> dict:
        return {
            "page": self.page,
            "per_page": self.per_page,
            "total_count": self.total_count,
            "total_pages": self.total_pages,
        }


def paginate(items: list, page: int | None = 1, per_page: int = 12) -> Page:
    page = max(int(page or 1), 1)
    offset = (page - 1) * per_page
    return Page(
        items=items[offset : offset + per_page],
        page=page,
        per_page=per_page,
        total_count=len(items),
    )
