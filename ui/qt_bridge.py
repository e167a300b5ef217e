from __future__ import annotations

"""Qt implementations of the scheduler, worker and UI-thread dispatch seams."""

from concurrent.futures import Future, ThreadPoolExecutor
import logging
from typing import Any, Callable, Optional

from PyQt6.QtCore import QObject, QTimer, Qt, pyqtSignal

logger = logging.getLogger(__name__)


class _QtTimerHandle:
    def __init__(self, timer: QTimer) -> None:
        self._timer: Optional[QTimer] = timer

    def cancel(self) -> None:
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.stop()
            timer.deleteLater()

    def _fired(self) -> None:
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.deleteLater()


class QtScheduler:
    """One-shot timers parented to ``parent`` so they die with the window."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> _QtTimerHandle:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        handle = _QtTimerHandle(timer)

        def _fire() -> None:
            handle._fired()
            callback()

        timer.timeout.connect(_fire)
        timer.start(max(int(delay_ms), 0))
        return handle


class UiDispatcher(QObject):
    """Runs callables on the thread this object lives on (the GUI thread).

    Worker threads call :meth:`dispatch`; the queued signal hops the
    callable back onto the event loop.
    """

    _invoke = pyqtSignal(object)

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._invoke.connect(self._run, Qt.ConnectionType.QueuedConnection)

    def dispatch(self, callback: Callable[[], None]) -> None:
        self._invoke.emit(callback)

    def __call__(self, callback: Callable[[], None]) -> None:
        self.dispatch(callback)

    def _run(self, callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception:
            logger.exception("UI callback failed")


class BackgroundRunner:
    """Small thread pool whose futures are cancelled when the window closes."""

    def __init__(self, max_workers: int = 2) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers)
        self._inflight: set[Future[Any]] = set()

    def submit(self, work: Callable[[], Any]) -> Future[Any]:
        future = self._executor.submit(work)
        self._inflight.add(future)
        future.add_done_callback(self._inflight.discard)
        return future

    __call__ = submit

    def shutdown(self) -> None:
        for future in list(self._inflight):
            future.cancel()
        self._executor.shutdown(wait=False)


__all__ = ["BackgroundRunner", "QtScheduler", "UiDispatcher"]
