from __future__ import annotations

"""State for the courier's admin-alert banner."""

from dataclasses import dataclass
import logging
from typing import Any, Callable, Mapping, Optional, Protocol

from logic.scheduling import Dispatch, Scheduler, TimerHandle, call_now

logger = logging.getLogger(__name__)

ALERT_EVENT = "new_alert"
DEFAULT_HIDE_MS = 10_000


def courier_channel(token: str) -> str:
    return f"courier-{token}"


class AlertSource(Protocol):
    def subscribe(
        self, channel: str, event: str, callback: Callable[[Mapping[str, Any]], None]
    ) -> Callable[[], None]:
        ...


@dataclass(frozen=True)
class Alert:
    message: str
    sent_at: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> Optional["Alert"]:
        # broadcast frames may wrap the body in a "payload" key
        body = payload.get("payload", payload) if isinstance(payload, Mapping) else None
        if not isinstance(body, Mapping):
            return None
        message = body.get("message")
        if not message:
            return None
        return cls(message=str(message), sent_at=body.get("sent_at") or None)


class AlertBannerModel:
    """Show the most recent alert; hide it after ``hide_after_ms`` or on dismiss.

    Each new alert restarts the hide timer.
    """

    def __init__(
        self,
        source: AlertSource,
        token: str,
        *,
        scheduler: Scheduler,
        dispatch: Dispatch = call_now,
        hide_after_ms: int = DEFAULT_HIDE_MS,
        on_change: Optional[Callable[["AlertBannerModel"], None]] = None,
    ) -> None:
        self._source = source
        self._token = token
        self._scheduler = scheduler
        self._dispatch = dispatch
        self._hide_after_ms = hide_after_ms
        self._on_change = on_change
        self._alert: Optional[Alert] = None
        self._visible = False
        self._timer: Optional[TimerHandle] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def alert(self) -> Optional[Alert]:
        return self._alert

    @property
    def visible(self) -> bool:
        return self._visible and self._alert is not None

    @property
    def subscribed(self) -> bool:
        return self._unsubscribe is not None

    def start(self) -> None:
        if not self._token or self._unsubscribe is not None:
            return
        self._unsubscribe = self._source.subscribe(
            courier_channel(self._token), ALERT_EVENT, self._on_payload
        )

    def dismiss(self) -> None:
        self._cancel_timer()
        if self._visible:
            self._visible = False
            self._changed()

    def close(self) -> None:
        self._cancel_timer()
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()

    def _on_payload(self, payload: Mapping[str, Any]) -> None:
        alert = Alert.from_payload(payload)
        if alert is None:
            logger.debug("Ignoring malformed alert payload: %r", payload)
            return
        self._dispatch(lambda: self._show(alert))

    def _show(self, alert: Alert) -> None:
        if self._unsubscribe is None:
            return
        logger.info("Received alert for courier %s", self._token)
        self._alert = alert
        self._visible = True
        self._cancel_timer()
        self._timer = self._scheduler.call_later(self._hide_after_ms, self._auto_hide)
        self._changed()

    def _auto_hide(self) -> None:
        self._timer = None
        if self._visible:
            self._visible = False
            self._changed()

    def _cancel_timer(self) -> None:
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self)


__all__ = ["Alert", "AlertBannerModel", "AlertSource", "courier_channel", "ALERT_EVENT"]
