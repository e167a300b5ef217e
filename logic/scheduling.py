from __future__ import annotations

"""Timer, worker and dispatch seams shared by the Qt-free controllers.

Controllers never touch Qt or threads directly. They receive:

* a :class:`Scheduler` for one-shot timers (debounce, alert auto-hide),
* a ``Worker`` that runs a blocking callable off the UI thread and returns a
  :class:`concurrent.futures.Future`,
* a ``Dispatch`` that re-enters the UI thread with a zero-argument callable.

The Qt implementations live in :mod:`ui.qt_bridge`.
"""

from concurrent.futures import Future
from typing import Any, Callable, Protocol

Worker = Callable[[Callable[[], Any]], "Future[Any]"]
Dispatch = Callable[[Callable[[], None]], None]


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        ...


def call_now(callback: Callable[[], None]) -> None:
    """Dispatch that runs ``callback`` on the calling thread."""

    callback()


__all__ = ["Worker", "Dispatch", "TimerHandle", "Scheduler", "call_now"]
