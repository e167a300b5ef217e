from __future__ import annotations

"""Immutable query/page value types shared by every paginated listing."""

from dataclasses import dataclass, field, replace
from enum import Enum
import math
from typing import Any, Generic, Sequence, Tuple, TypeVar

from utils.exceptions import ValidationError

T = TypeVar("T")


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortOrder":
        return SortOrder.DESC if self is SortOrder.ASC else SortOrder.ASC


class ListFilter(str, Enum):
    """Base for the per-listing filter enums (values travel as ``p_filter``)."""


class AllFilter(ListFilter):
    ALL = "all"


@dataclass(frozen=True)
class ListQuery:
    page: int = 1
    limit: int = 10
    search: str = ""
    sort_by: str = "date_created"
    sort_order: SortOrder = SortOrder.DESC
    filter: Enum = AllFilter.ALL

    def __post_init__(self) -> None:
        if isinstance(self.page, bool) or not isinstance(self.page, int) or self.page < 1:
            raise ValidationError(f"page must be an integer >= 1, got {self.page!r}")
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 1:
            raise ValidationError(f"limit must be an integer > 0, got {self.limit!r}")
        if not isinstance(self.search, str):
            raise ValidationError("search must be a string")
        if not self.sort_by:
            raise ValidationError("sort_by must name a column")
        try:
            order = SortOrder(self.sort_order)
        except ValueError as exc:
            raise ValidationError(f"sort_order must be asc or desc, got {self.sort_order!r}") from exc
        object.__setattr__(self, "sort_order", order)

    def with_changes(self, **changes: Any) -> "ListQuery":
        """Return a new validated query; ``self`` is never mutated."""

        return replace(self, **changes)

    def to_params(self) -> dict[str, Any]:
        """Parameters for the paginated search procedures."""

        return {
            "p_page": self.page,
            "p_limit": self.limit,
            "p_search": self.search.strip(),
            "p_sort_by": self.sort_by,
            "p_sort_order": self.sort_order.value,
            "p_filter": getattr(self.filter, "value", str(self.filter)),
        }


@dataclass(frozen=True)
class ListPage(Generic[T]):
    items: Tuple[T, ...] = field(default_factory=tuple)
    total: int = 0
    page: int = 1
    limit: int = 10

    def __post_init__(self) -> None:
        if self.total < 0:
            raise ValidationError(f"total must be >= 0, got {self.total}")
        if self.page < 1 or self.limit < 1:
            raise ValidationError("page and limit must be positive")
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total, self.limit)

    @classmethod
    def of(cls, items: Sequence[T], *, total: int, query: ListQuery) -> "ListPage[T]":
        return cls(items=tuple(items), total=total, page=query.page, limit=query.limit)


def total_pages_for(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total > 0 else 0


__all__ = [
    "SortOrder",
    "ListFilter",
    "AllFilter",
    "ListQuery",
    "ListPage",
    "total_pages_for",
]
