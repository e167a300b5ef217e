"""Admin dashboard main window with role-gated sidebar navigation."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from PyQt6.QtGui import QAction, QFont, QKeySequence
from PyQt6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QStackedWidget,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from logic.visibility import ADMIN_NAV, NavItem
from models.profile import Profile
from ui.components import NavButton
from ui.dashboard_core import DashboardContext, NavigationController, PageRegistry
from ui.qt_bridge import BackgroundRunner, QtScheduler, UiDispatcher
from utils.config import AppConfig
from utils.path_utils import get_base_dir

from .pages import AdminHomePage, CustomersPage, DashboardPage, FinancePage, OrdersPage, SettingsPage

logger = logging.getLogger(__name__)

PAGE_CLASSES: Dict[str, Callable[[], DashboardPage]] = {
    "home": AdminHomePage,
    "customers": CustomersPage,
    "orders": OrdersPage,
    "finance": FinancePage,
    "settings": SettingsPage,
}

TOAST_PREFIXES = {"success": "OK", "error": "ERROR", "warning": "WARN", "info": "INFO"}
TOAST_TIMEOUT_MS = 5000


class MainWindow(QMainWindow):
    """Admin dashboard: only the pages the profile's role may see are built."""

    def __init__(self, services: Any, profile: Profile, config: AppConfig) -> None:
        super().__init__()
        self.profile = profile
        self._runner = BackgroundRunner()
        self._on_close: List[Callable[[], None]] = []
        self._dispatcher = UiDispatcher(self)
        self._context = DashboardContext(
            base_path=get_base_dir(),
            run_async=self._runner.submit,
            scheduler=QtScheduler(self),
            dispatch=self._dispatcher.dispatch,
            services=services,
            profile=profile,
            data_dir=Path(config.data_dir),
            page_size=config.page_size,
            debounce_ms=config.debounce_ms,
            show_toast=self._show_toast,
            register_cleanup=self._add_close_callback,
        )

        self._registry = PageRegistry()
        for item in ADMIN_NAV:
            self._registry.register(item, lambda _ctx, key=item.key: PAGE_CLASSES[key]())
        self._nav = NavigationController(self._registry, profile.capabilities)
        self._nav.add_listener(self._show_page)

        self.nav_buttons: Dict[str, NavButton] = {}
        self.pages: Dict[str, QWidget] = {}
        self.stack = QStackedWidget()
        self.title = QLabel("Dashboard")

        self.setWindowTitle("Admin Dashboard")
        self.resize(1120, 740)
        self.setCentralWidget(self._build_body())
        self.setStatusBar(QStatusBar())
        self._build_menu()
        self._build_pages()

        keys = self._nav.visible_keys()
        if keys:
            self.navigate(keys[0])

    # -- layout -------------------------------------------------------------

    def _build_body(self) -> QWidget:
        body = QWidget()
        columns = QHBoxLayout(body)
        columns.setContentsMargins(0, 0, 0, 0)
        columns.setSpacing(0)
        columns.addWidget(self._build_sidebar())

        content = QWidget()
        stacked = QVBoxLayout(content)
        stacked.setContentsMargins(0, 0, 0, 0)
        stacked.setSpacing(0)
        stacked.addWidget(self._build_header())
        stacked.addWidget(self.stack, 1)
        columns.addWidget(content, 1)
        return body

    def _build_sidebar(self) -> QFrame:
        sidebar = QFrame(objectName="Sidebar")
        sidebar.setFixedWidth(220)
        column = QVBoxLayout(sidebar)
        column.setContentsMargins(12, 14, 12, 14)
        column.setSpacing(4)

        brand = QLabel("Catering Admin")
        brand.setStyleSheet("font-size:16px; font-weight:800;")
        column.addWidget(brand)

        visible = self._registry.visible(self.profile.capabilities)
        for item in visible:
            if not item.footer:
                column.addWidget(self._nav_button(item))
        column.addStretch()
        for item in visible:
            if item.footer:
                column.addWidget(self._nav_button(item))

        who = QLabel(self.profile.display_name or self.profile.email or self.profile.role.value)
        who.setToolTip(f"Role: {self.profile.role.value}")
        column.addWidget(who)
        return sidebar

    def _build_header(self) -> QFrame:
        header = QFrame(objectName="Header")
        row = QHBoxLayout(header)
        row.setContentsMargins(20, 10, 20, 10)
        self.title.setObjectName("Title")
        self.title.setFont(QFont(self.title.font().family(), 12, weight=QFont.Weight.Bold))
        row.addWidget(self.title)
        row.addStretch()
        return header

    def _nav_button(self, item: NavItem) -> NavButton:
        button = NavButton(item.label)
        button.setToolTip(item.tooltip)
        button.clicked.connect(lambda _checked=False, key=item.key: self.navigate(key))
        self.nav_buttons[item.key] = button
        return button

    def _build_menu(self) -> None:
        menu = self.menuBar().addMenu("&File")
        refresh = QAction("&Refresh", self)
        refresh.setShortcut(QKeySequence("F5"))
        refresh.triggered.connect(self.refresh_current)
        menu.addAction(refresh)
        menu.addSeparator()
        close = QAction("&Quit", self)
        close.setShortcut(QKeySequence.StandardKey.Quit)
        close.triggered.connect(self.close)
        menu.addAction(close)

    def _build_pages(self) -> None:
        for key in self._nav.visible_keys():
            page = self._registry.build(key, self._context)
            self.pages[key] = page
            self.stack.addWidget(page)
            if isinstance(page, DashboardPage):
                page.attach(self._context)

    # -- navigation -----------------------------------------------------------

    @property
    def context(self) -> DashboardContext:
        return self._context

    @property
    def current_key(self) -> Optional[str]:
        return self._nav.current_key

    def navigate(self, key: str) -> bool:
        try:
            self._nav.set_current(key)
        except (KeyError, PermissionError) as exc:
            logger.warning("Navigation to %s refused: %s", key, exc)
            return False
        return True

    def refresh_current(self) -> None:
        page = self.pages.get(self._nav.current_key or "")
        if isinstance(page, DashboardPage):
            page.refresh()

    def _show_page(self, key: Optional[str]) -> None:
        for name, button in self.nav_buttons.items():
            button.setChecked(name == key)
        page = self.pages.get(key) if key else None
        if page is None:
            return
        label = self._registry.item(key).label
        self.stack.setCurrentWidget(page)
        self.title.setText(label)
        self.statusBar().showMessage(label, 2000)

    # -- shell services -------------------------------------------------------

    def _add_close_callback(self, callback: Callable[[], None]) -> None:
        if callback not in self._on_close:
            self._on_close.append(callback)

    def _show_toast(self, kind: str, message: str) -> None:
        prefix = TOAST_PREFIXES.get(kind, kind.upper())
        self.statusBar().showMessage(f"[{prefix}] {message}", TOAST_TIMEOUT_MS)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        while self._on_close:
            callback = self._on_close.pop()
            try:
                callback()
            except Exception:
                logger.exception("Close callback failed")
        self._runner.shutdown()
        super().closeEvent(event)


__all__ = ["MainWindow", "PAGE_CLASSES"]
