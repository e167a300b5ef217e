from __future__ import annotations

"""Trailing-edge debounce for rapidly changing inputs (search boxes)."""

from typing import Callable, Generic, Optional, TypeVar

from logic.scheduling import Scheduler, TimerHandle

T = TypeVar("T")

_UNSET = object()


class Debouncer(Generic[T]):
    """Emit the last pushed value once the input has been quiet for ``delay_ms``.

    Every :meth:`push` restarts the timer, even when the value equals the one
    already emitted. :meth:`cancel` must be called on teardown so no callback
    fires against a disposed view.
    """

    def __init__(self, scheduler: Scheduler, delay_ms: int, callback: Callable[[T], None]) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self._scheduler = scheduler
        self._delay_ms = delay_ms
        self._callback = callback
        self._handle: Optional[TimerHandle] = None
        self._value: object = _UNSET
        self._closed = False

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    def push(self, value: T) -> None:
        if self._closed:
            return
        self._cancel_timer()
        self._value = value
        self._handle = self._scheduler.call_later(self._delay_ms, self._fire)

    def flush(self) -> None:
        """Emit a pending value now instead of waiting for the timer."""

        if self._handle is None:
            return
        self._cancel_timer()
        self._emit()

    def cancel(self) -> None:
        self._cancel_timer()
        self._value = _UNSET

    def close(self) -> None:
        self.cancel()
        self._closed = True

    def _cancel_timer(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()

    def _fire(self) -> None:
        if self._handle is None or self._closed:
            return
        self._handle = None
        self._emit()

    def _emit(self) -> None:
        value, self._value = self._value, _UNSET
        if value is _UNSET:
            return
        self._callback(value)  # type: ignore[arg-type]


__all__ = ["Debouncer"]
