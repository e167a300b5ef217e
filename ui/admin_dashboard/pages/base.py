"""Base classes for admin dashboard pages."""
from __future__ import annotations

from concurrent.futures import Future
from enum import Enum
import logging
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from logic.list_view_controller import ListViewController, ListViewState
from models.list_query import ListPage, ListQuery, SortOrder
from services.preference_store import preference_store_for
from ui.components import Card, PaginationBar, error_label, section_title, show_error
from ui.dashboard_core import DashboardContext
from utils.exceptions import GatewayError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DashboardPage(QWidget):
    """Skeleton QWidget with a lifecycle hook for the shared context."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._context: Optional[DashboardContext] = None

    @property
    def context(self) -> DashboardContext:
        if self._context is None:
            raise RuntimeError("DashboardContext not attached yet")
        return self._context

    def attach(self, context: DashboardContext) -> None:
        self._context = context
        self.on_attached()

    def on_attached(self) -> None:
        """Hook invoked once the shared context is available."""

    def refresh(self) -> None:  # pragma: no cover - UI hook
        """Optional hook for navigation controller to trigger reloads."""

    def run_in_background(
        self,
        work: Callable[[], Any],
        on_success: Callable[[Any], None],
        on_error: Optional[Callable[[BaseException], None]] = None,
    ) -> "Future[Any]":
        """Run ``work`` on the dashboard worker and report back on the UI thread."""

        context = self.context
        future = context.run_async(work)

        def _deliver(fut: "Future[Any]") -> None:
            if fut.cancelled():
                return
            exc = fut.exception()
            if exc is None:
                context.dispatch(lambda: on_success(fut.result()))
                return
            if isinstance(exc, GatewayError):
                logger.warning("%s: background call failed: %s", type(self).__name__, exc)
            else:
                logger.error("%s: background call failed", type(self).__name__, exc_info=exc)
            if on_error is not None:
                context.dispatch(lambda: on_error(exc))

        future.add_done_callback(_deliver)
        return future


Column = Tuple[str, Optional[str]]


class ListingPage(DashboardPage, Generic[T]):
    """Searchable, filterable, sortable and paginated table page.

    Subclasses describe the listing (``columns``, ``filters``) and provide
    ``fetch_page`` and ``row_values``; the controller does the rest.
    """

    title = ""
    subtitle = ""
    search_placeholder = "Search..."
    page_key = "list"
    columns: Sequence[Column] = ()
    filters: Sequence[Tuple[str, Enum]] = ()
    default_sort: Tuple[str, SortOrder] = ("date_created", SortOrder.DESC)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.controller: Optional[ListViewController[T]] = None
        self._rows: Tuple[T, ...] = ()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(18, 18, 18, 18)
        layout.setSpacing(18)

        card = Card()
        self.card = card
        card.layout().addWidget(section_title(self.title))
        if self.subtitle:
            card.layout().addWidget(QLabel(self.subtitle))

        self.toolbar = QHBoxLayout()
        self.search = QLineEdit()
        self.search.setPlaceholderText(self.search_placeholder)
        self.search.setClearButtonEnabled(True)
        self.toolbar.addWidget(self.search, 1)
        self.filter_combo = QComboBox()
        for label, value in self.filters:
            self.filter_combo.addItem(label, value)
        self.filter_combo.setVisible(bool(self.filters))
        self.toolbar.addWidget(self.filter_combo)
        card.layout().addLayout(self.toolbar)

        self.error = error_label()
        self.retry_button = QPushButton("Retry")
        self.retry_button.setVisible(False)
        error_row = QHBoxLayout()
        error_row.addWidget(self.error, 1)
        error_row.addWidget(self.retry_button)
        card.layout().addLayout(error_row)

        self.table = QTableWidget(0, len(self.columns))
        self.table.setHorizontalHeaderLabels([header for header, _key in self.columns])
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        header.setSectionsClickable(True)
        header.setSortIndicatorShown(True)
        card.layout().addWidget(self.table)

        self.status_label = QLabel()
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignHCenter)
        card.layout().addWidget(self.status_label)

        self.pager = PaginationBar()
        card.layout().addWidget(self.pager)
        layout.addWidget(card)

    # -- subclass hooks ---------------------------------------------------

    def fetch_page(self, query: ListQuery) -> ListPage[T]:
        raise NotImplementedError

    def row_values(self, item: T) -> List[str]:
        raise NotImplementedError

    def empty_message(self, state: ListViewState[T]) -> str:
        if state.query.search:
            return f'No results for "{state.query.search}"'
        return "Nothing to show yet"

    # -- lifecycle --------------------------------------------------------

    def on_attached(self) -> None:
        context = self.context
        sort_by, sort_order = self.default_sort
        initial = ListQuery(
            limit=context.page_size,
            sort_by=sort_by,
            sort_order=sort_order,
            filter=self.filters[0][1] if self.filters else ListQuery().filter,
        )
        self.pager.size_combo.blockSignals(True)
        index = self.pager.size_combo.findData(context.page_size)
        if index < 0:
            self.pager.size_combo.addItem(str(context.page_size), context.page_size)
            index = self.pager.size_combo.count() - 1
        self.pager.size_combo.setCurrentIndex(index)
        self.pager.size_combo.blockSignals(False)

        self.controller = ListViewController(
            self.fetch_page,
            self._render,
            run_async=context.run_async,
            scheduler=context.scheduler,
            dispatch=context.dispatch,
            initial_query=initial,
            debounce_ms=context.debounce_ms,
            preferences=preference_store_for(context.data_dir, self.page_key) if context.data_dir else None,
            name=self.page_key,
        )
        context.on_close(self.controller.close)

        self.search.textChanged.connect(self.controller.set_search_text)
        self.search.returnPressed.connect(self.controller.submit_search)
        self.filter_combo.currentIndexChanged.connect(self._on_filter_changed)
        self.table.horizontalHeader().sectionClicked.connect(self._on_header_clicked)
        self.retry_button.clicked.connect(self.controller.refresh)
        self.pager.previousRequested.connect(self.controller.previous_page)
        self.pager.nextRequested.connect(self.controller.next_page)
        self.pager.pageSizeChanged.connect(self.controller.set_page_size)
        self.controller.start()

    def refresh(self) -> None:
        if self.controller is not None and not self.controller.state.loading:
            self.controller.refresh()

    def selected_item(self) -> Optional[T]:
        row = self.table.currentRow()
        if 0 <= row < len(self._rows):
            return self._rows[row]
        return None

    # -- rendering --------------------------------------------------------

    def _on_filter_changed(self, index: int) -> None:
        if self.controller is not None and index >= 0:
            self.controller.set_filter(self.filter_combo.itemData(index))

    def _on_header_clicked(self, section: int) -> None:
        if self.controller is None or section >= len(self.columns):
            return
        sort_key = self.columns[section][1]
        if sort_key:
            self.controller.toggle_sort(sort_key)

    def _render(self, state: ListViewState[T]) -> None:
        self._rows = tuple(state.rows)
        self.table.setRowCount(len(self._rows))
        for row_index, item in enumerate(self._rows):
            for col, value in enumerate(self.row_values(item)):
                self.table.setItem(row_index, col, QTableWidgetItem(value))

        keys = [key for _header, key in self.columns]
        if state.query.sort_by in keys:
            order = (
                Qt.SortOrder.AscendingOrder
                if state.query.sort_order is SortOrder.ASC
                else Qt.SortOrder.DescendingOrder
            )
            self.table.horizontalHeader().setSortIndicator(keys.index(state.query.sort_by), order)

        show_error(self.error, state.error)
        self.retry_button.setVisible(bool(state.error))
        if state.loading and not self._rows:
            self.status_label.setText("Loading...")
        elif state.is_empty and not state.error:
            self.status_label.setText(self.empty_message(state))
        else:
            self.status_label.setText("")
        self.pager.update_state(
            page=state.page,
            total_pages=state.total_pages,
            total=state.total,
            shown=len(self._rows),
            has_previous=state.has_previous,
            has_next=state.has_next,
            loading=state.loading,
        )


__all__ = ["DashboardPage", "ListingPage"]
