from __future__ import annotations

from models.list_query import total_pages_for
from utils.exceptions import ValidationError


class PaginationState:
    """Current page / page size / total bookkeeping for a listing.

    ``go_to_page`` and ``on_new_total`` return ``True`` when the caller has
    to fetch again.
    """

    def __init__(self, limit: int, page: int = 1) -> None:
        if limit < 1:
            raise ValidationError(f"limit must be > 0, got {limit}")
        if page < 1:
            raise ValidationError(f"page must be >= 1, got {page}")
        self._limit = limit
        self._page = page
        self._total = 0

    @property
    def page(self) -> int:
        return self._page

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def total(self) -> int:
        return self._total

    @property
    def total_pages(self) -> int:
        return total_pages_for(self._total, self._limit)

    @property
    def has_previous(self) -> bool:
        return self._page > 1

    @property
    def has_next(self) -> bool:
        return self._page < self.total_pages

    def go_to_page(self, page: int) -> bool:
        if page < 1 or page > self.total_pages:
            return False
        self._page = page
        return True

    def next_page(self) -> bool:
        return self.go_to_page(self._page + 1)

    def previous_page(self) -> bool:
        return self.go_to_page(self._page - 1)

    def on_new_total(self, total: int) -> bool:
        """Record ``total`` and clamp the page into ``[1, max(1, total_pages)]``."""

        if total < 0:
            raise ValidationError(f"total must be >= 0, got {total}")
        self._total = total
        ceiling = max(1, self.total_pages)
        if self._page > ceiling:
            self._page = ceiling
            return True
        return False

    def reset(self) -> None:
        self._page = 1

    def set_limit(self, limit: int) -> None:
        if limit < 1:
            raise ValidationError(f"limit must be > 0, got {limit}")
        self._limit = limit
        self._page = 1

    def __repr__(self) -> str:
        return f"PaginationState(page={self._page}, limit={self._limit}, total={self._total})"


__all__ = ["PaginationState"]
