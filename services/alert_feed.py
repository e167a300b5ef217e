from __future__ import annotations

"""In-process broadcast hub for realtime channel events.

The network transport (the backend's websocket feed) publishes into the hub;
UI models subscribe per ``(channel, event)`` pair and get an unsubscribe
closure back.
"""

from collections import defaultdict
import logging
from threading import RLock
from typing import Any, Callable, Dict, Mapping, Optional

_LOGGER = logging.getLogger(__name__)

EventPayload = Mapping[str, Any]
EventCallback = Callable[[EventPayload], None]


def topic_for(channel: str, event: str) -> str:
    return f"{channel}:{event}"


class BroadcastHub:
    """Lightweight pub/sub so UI models can observe broadcast events."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[EventCallback]] = defaultdict(list)
        self._lock = RLock()

    def subscribe(self, channel: str, event: str, callback: EventCallback) -> Callable[[], None]:
        """Register *callback* for *event* on *channel*; returns an unsubscribe closure."""

        topic = topic_for(channel, event)
        with self._lock:
            self._subscribers[topic].append(callback)
        _LOGGER.debug("Subscribed to %s", topic)

        def _unsubscribe() -> None:
            self.unsubscribe(channel, event, callback)

        return _unsubscribe

    def unsubscribe(self, channel: str, event: str, callback: EventCallback) -> None:
        topic = topic_for(channel, event)
        with self._lock:
            callbacks = self._subscribers.get(topic)
            if not callbacks:
                return
            try:
                callbacks.remove(callback)
            except ValueError:
                return
            if not callbacks:
                self._subscribers.pop(topic, None)

    def publish(self, channel: str, event: str, payload: Optional[EventPayload] = None) -> int:
        """Deliver *payload* to every subscriber; returns the number notified."""

        topic = topic_for(channel, event)
        payload = payload or {}
        with self._lock:
            callbacks = list(self._subscribers.get(topic, ()))
        for callback in callbacks:
            try:
                callback(payload)
            except Exception:  # pragma: no cover
                _LOGGER.exception("Broadcast subscriber failed for %s", topic)
        return len(callbacks)

    def subscriber_count(self, channel: str, event: str) -> int:
        with self._lock:
            return len(self._subscribers.get(topic_for(channel, event), ()))


_HUB: Optional[BroadcastHub] = None


def broadcast_hub() -> BroadcastHub:
    """Return the process-wide hub."""

    global _HUB
    if _HUB is None:
        _HUB = BroadcastHub()
    return _HUB


__all__ = ["BroadcastHub", "broadcast_hub", "topic_for", "EventPayload", "EventCallback"]
