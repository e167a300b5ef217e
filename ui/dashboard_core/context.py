"""Shared context helpers for dashboard-style windows."""
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable, FrozenSet, Optional

from logic.scheduling import Dispatch, Scheduler, Worker, call_now
from models.profile import Profile, Role

ToastFn = Callable[[str, str], None]
CleanupFn = Callable[[Callable[[], None]], None]


@dataclass(frozen=True)
class DashboardContext:
    """Dependency bundle handed to every page factory.

    ``services`` is the window's service container (backend client and the
    per-concern services built on it).
    """

    base_path: Path
    run_async: Worker
    scheduler: Scheduler
    dispatch: Dispatch = call_now
    services: Any = None
    profile: Optional[Profile] = None
    data_dir: Optional[Path] = None
    page_size: int = 10
    debounce_ms: int = 300
    show_toast: Optional[ToastFn] = None
    register_cleanup: Optional[CleanupFn] = None

    @property
    def roles(self) -> FrozenSet[Role]:
        return self.profile.capabilities if self.profile is not None else frozenset()

    def toast(self, kind: str, message: str) -> None:
        if self.show_toast is not None:
            self.show_toast(kind, message)

    def on_close(self, callback: Callable[[], None]) -> None:
        if self.register_cleanup is not None:
            self.register_cleanup(callback)

    def with_overrides(self, **changes: Any) -> "DashboardContext":
        """Return a cloned context with updated attributes."""
        return replace(self, **changes)


__all__ = ["DashboardContext", "Worker", "ToastFn", "CleanupFn"]
