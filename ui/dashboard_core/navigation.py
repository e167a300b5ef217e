"""Navigation scaffolding shared across dashboard windows."""
from __future__ import annotations

from collections import OrderedDict
import logging
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Tuple

from logic.visibility import NavItem, is_visible, visible_items
from models.profile import Role

from .context import DashboardContext

if TYPE_CHECKING:  # pragma: no cover
    from PyQt6.QtWidgets import QWidget

logger = logging.getLogger(__name__)

PageFactory = Callable[[DashboardContext], "QWidget"]


class PageRegistry:
    """Registry mapping navigation items to page factories."""

    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[NavItem, PageFactory]] = OrderedDict()

    def register(self, item: NavItem, factory: PageFactory) -> None:
        if item.key in self._entries:
            raise KeyError(f"Page '{item.key}' already registered")
        self._entries[item.key] = (item, factory)

    def keys(self) -> Iterable[str]:
        return self._entries.keys()

    def items(self) -> List[NavItem]:
        return [item for item, _factory in self._entries.values()]

    def item(self, key: str) -> NavItem:
        return self._entries[key][0]

    def visible(self, granted: Iterable[Role]) -> List[NavItem]:
        return visible_items(self.items(), granted)

    def build(self, key: str, context: DashboardContext) -> "QWidget":
        return self._entries[key][1](context)


class NavigationController:
    """Tracks the current page; hidden pages cannot be selected."""

    def __init__(self, registry: PageRegistry, granted: Iterable[Role] = ()) -> None:
        self._registry = registry
        self._granted = frozenset(granted)
        self._current_key: str | None = None
        self._listeners: list[Callable[[str | None], None]] = []

    @property
    def current_key(self) -> str | None:
        return self._current_key

    def visible_keys(self) -> List[str]:
        return [item.key for item in self._registry.visible(self._granted)]

    def add_listener(self, callback: Callable[[str | None], None]) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[str | None], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def set_current(self, key: str) -> None:
        if key not in self._registry.keys():
            raise KeyError(f"Unknown page '{key}'")
        if not is_visible(self._registry.item(key), self._granted):
            raise PermissionError(f"Page '{key}' is not available for this role")
        if self._current_key == key:
            return
        self._current_key = key
        self._emit()

    def _emit(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._current_key)
            except Exception:
                logger.exception("Navigation listener failed")


__all__ = ["PageRegistry", "NavigationController", "PageFactory"]
