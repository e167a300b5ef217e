from __future__ import annotations

"""Controller behind every paginated, searchable, sortable table.

The controller owns the *effective* :class:`~models.list_query.ListQuery`
and republishes an immutable :class:`ListViewState` whenever something the
table renders changes. Raw search text is debounced; filter, sort and paging
changes apply immediately. Each fetch is tagged with a generation number and
only the result of the latest generation is applied, so responses that
arrive out of order can never overwrite newer data.
"""

from concurrent.futures import Future
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Any, Callable, Generic, Optional, Tuple, TypeVar

from logic.debounce import Debouncer
from logic.pagination import PaginationState
from logic.preferences import PreferenceProvider, SortPreference
from logic.scheduling import Dispatch, Scheduler, Worker, call_now
from models.list_query import ListPage, ListQuery, SortOrder
from utils.exceptions import GatewayError

logger = logging.getLogger(__name__)

T = TypeVar("T")

FetchPage = Callable[[ListQuery], ListPage[T]]

DEFAULT_ERROR_MESSAGE = "Failed to load data. Please try again."


@dataclass(frozen=True)
class ListViewState(Generic[T]):
    rows: Tuple[T, ...] = field(default_factory=tuple)
    total: int = 0
    page: int = 1
    total_pages: int = 0
    loading: bool = False
    error: Optional[str] = None
    query: ListQuery = field(default_factory=ListQuery)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def is_empty(self) -> bool:
        return not self.rows and not self.loading and self.error is None


def next_sort(current_by: str, current_order: SortOrder, column: str) -> Tuple[str, SortOrder]:
    """Clicking the active column flips direction; a new column starts ascending."""

    if column == current_by:
        return column, SortOrder(current_order).flipped()
    return column, SortOrder.ASC


class ListViewController(Generic[T]):
    def __init__(
        self,
        fetch_page: FetchPage,
        on_state: Callable[[ListViewState[T]], None],
        *,
        run_async: Worker,
        scheduler: Scheduler,
        dispatch: Dispatch = call_now,
        initial_query: Optional[ListQuery] = None,
        debounce_ms: int = 300,
        preferences: Optional[PreferenceProvider] = None,
        error_message: str = DEFAULT_ERROR_MESSAGE,
        name: str = "list",
    ) -> None:
        self._fetch_page = fetch_page
        self._on_state = on_state
        self._run_async = run_async
        self._dispatch = dispatch
        self._preferences = preferences
        self._error_message = error_message
        self._name = name

        query = initial_query or ListQuery()
        saved = self._load_preference()
        if saved is not None:
            query = query.with_changes(sort_by=saved.sort_by, sort_order=saved.sort_order)
        self._query = query
        self._pagination = PaginationState(query.limit, query.page)
        self._debouncer: Debouncer[str] = Debouncer(scheduler, debounce_ms, self._on_search_settled)

        self._generation = 0
        self._rows: Tuple[T, ...] = ()
        self._loading = False
        self._error: Optional[str] = None
        self._closed = False
        self._state = self._snapshot()

    # -- read side --------------------------------------------------------

    @property
    def state(self) -> ListViewState[T]:
        return self._state

    @property
    def query(self) -> ListQuery:
        return self._query

    @property
    def closed(self) -> bool:
        return self._closed

    # -- inputs -----------------------------------------------------------

    def start(self) -> None:
        """Issue the initial fetch for the current query."""

        self._issue()

    def refresh(self) -> None:
        """Re-issue the current effective query (manual retry)."""

        self._issue()

    def set_search_text(self, text: str) -> None:
        self._debouncer.push(text)

    def submit_search(self) -> None:
        """Apply pending search text now (Enter key)."""

        self._debouncer.flush()

    def set_filter(self, value: Enum) -> None:
        if value == self._query.filter:
            return
        self._pagination.reset()
        self._apply(self._query.with_changes(filter=value, page=1))

    def toggle_sort(self, column: str) -> None:
        sort_by, sort_order = next_sort(self._query.sort_by, self._query.sort_order, column)
        self._save_preference(SortPreference(sort_by, sort_order))
        self._apply(self._query.with_changes(sort_by=sort_by, sort_order=sort_order))

    def go_to_page(self, page: int) -> None:
        if self._pagination.go_to_page(page):
            self._apply(self._query.with_changes(page=self._pagination.page))

    def next_page(self) -> None:
        self.go_to_page(self._pagination.page + 1)

    def previous_page(self) -> None:
        self.go_to_page(self._pagination.page - 1)

    def set_page_size(self, limit: int) -> None:
        self._pagination.set_limit(limit)
        self._apply(self._query.with_changes(limit=limit, page=1))

    def close(self) -> None:
        """Cancel timers and ignore every result that arrives afterwards."""

        self._closed = True
        self._debouncer.close()

    # -- internals --------------------------------------------------------

    def _on_search_settled(self, text: str) -> None:
        if text == self._query.search:
            return
        self._pagination.reset()
        self._apply(self._query.with_changes(search=text, page=1))

    def _apply(self, query: ListQuery) -> None:
        if self._closed:
            return
        if query == self._query:
            return
        self._query = query
        self._issue()

    def _issue(self) -> None:
        if self._closed:
            return
        self._generation += 1
        generation = self._generation
        query = self._query
        self._loading = True
        self._emit()
        try:
            future = self._run_async(lambda: self._fetch_page(query))
        except Exception as exc:
            logger.exception("%s: could not schedule fetch", self._name)
            self._finish_failure(generation, exc)
            return

        def _done(fut: "Future[Any]") -> None:
            self._dispatch(lambda: self._on_fetch_done(generation, query, fut))

        future.add_done_callback(_done)

    def _on_fetch_done(self, generation: int, query: ListQuery, future: "Future[Any]") -> None:
        if self._closed:
            return
        if generation != self._generation:
            logger.debug("%s: dropping stale result for generation %s", self._name, generation)
            return
        if future.cancelled():
            self._loading = False
            self._emit()
            return
        exc = future.exception()
        if exc is not None:
            self._finish_failure(generation, exc)
            return
        page: ListPage[T] = future.result()
        if self._pagination.on_new_total(page.total):
            logger.debug(
                "%s: page %s out of range for %s rows, clamping to %s",
                self._name,
                query.page,
                page.total,
                self._pagination.page,
            )
            self._query = query.with_changes(page=self._pagination.page)
            self._issue()
            return
        self._rows = tuple(page.items)
        self._loading = False
        self._error = None
        self._emit()

    def _finish_failure(self, generation: int, exc: BaseException) -> None:
        if generation != self._generation:
            return
        if isinstance(exc, GatewayError):
            logger.warning("%s: fetch failed (%s): %s", self._name, exc.code, exc.message)
        else:
            logger.error("%s: fetch failed", self._name, exc_info=exc)
        self._loading = False
        self._error = self._error_message
        self._emit()

    def _snapshot(self) -> ListViewState[T]:
        return ListViewState(
            rows=self._rows,
            total=self._pagination.total,
            page=self._pagination.page,
            total_pages=self._pagination.total_pages,
            loading=self._loading,
            error=self._error,
            query=self._query,
        )

    def _emit(self) -> None:
        self._state = self._snapshot()
        self._on_state(self._state)

    def _load_preference(self) -> Optional[SortPreference]:
        if self._preferences is None:
            return None
        try:
            return self._preferences.load()
        except Exception:
            logger.warning("%s: ignoring unreadable sort preference", self._name, exc_info=True)
            return None

    def _save_preference(self, preference: SortPreference) -> None:
        if self._preferences is None:
            return
        try:
            self._preferences.save(preference)
        except Exception:
            logger.warning("%s: could not persist sort preference", self._name, exc_info=True)


__all__ = ["ListViewController", "ListViewState", "FetchPage", "next_sort", "DEFAULT_ERROR_MESSAGE"]
