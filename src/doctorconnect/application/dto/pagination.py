"""Pagination DTOs shared by list use cases."""

import math
from dataclasses import dataclass, field
from typing import Generic, List, TypeVar

from ...domain.errors import ValidationError

T = TypeVar("T")

MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageRequest:
    """1-based page number and page size."""

    page: int = 1
    limit: int = 20
    max_limit: int = MAX_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("Page must be at least 1", details={"page": self.page})
        if not 1 <= self.limit <= self.max_limit:
            raise ValidationError(
                f"Limit must be between 1 and {self.max_limit}", details={"limit": self.limit}
            )

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20

    @classmethod
    def of(cls, items: List[T], total: int, request: PageRequest) -> "Page[T]":
        return cls(items=list(items), total=total, page=request.page, limit=request.limit)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.skip + len(self.items) < self.total

    @property
    def has_prev(self) -> bool:
        return self.page > 1
