"""Pagination contract shared by every repository listing."""

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from src.domain.exceptions import ValidationException

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """1-based page number and page size; both must be positive"""

    page: int = 1
    limit: int = 20

    def __post_init__(self):
        if self.page < 1:
            raise ValidationException("page must be 1 or greater", "page")
        if self.limit < 1:
            raise ValidationException("limit must be 1 or greater", "limit")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Page(Generic[T]):
    """
    One page of results.

    A page past the end holds no items; it is not an error.
    """

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @classmethod
    def of(cls, items: list[T], total: int, request: PageRequest) -> "Page[T]":
        return cls(items=list(items), total=total, page=request.page, limit=request.limit)
