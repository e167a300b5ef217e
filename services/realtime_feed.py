from __future__ import annotations

"""Websocket transport for the backend's realtime broadcast channels.

The backend speaks the Phoenix channel protocol: clients ``phx_join`` a
``realtime:<channel>`` topic, send a ``heartbeat`` on the ``phoenix`` topic
and receive ``broadcast`` frames whose payload carries the event name and
body. :class:`RealtimeFeed` republishes those broadcasts into a
:class:`~services.alert_feed.BroadcastHub`.
"""

import itertools
import json
import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Tuple
from urllib.parse import urlencode, urlsplit, urlunsplit

import websocket

from services.alert_feed import BroadcastHub, EventCallback

logger = logging.getLogger(__name__)

REALTIME_PATH = "/realtime/v1/websocket"
PROTOCOL_VERSION = "1.0.0"
HEARTBEAT_SECONDS = 25.0
RECONNECT_SECONDS = 5
TOPIC_PREFIX = "realtime:"
PHOENIX_TOPIC = "phoenix"

SocketFactory = Callable[..., Any]


def realtime_url(backend_url: str, api_key: str) -> str:
    """``https://host`` becomes ``wss://host/realtime/v1/websocket?apikey=...``."""

    parts = urlsplit(backend_url)
    scheme = "wss" if parts.scheme == "https" else "ws"
    path = parts.path.rstrip("/") + REALTIME_PATH
    query = urlencode({"apikey": api_key, "vsn": PROTOCOL_VERSION})
    return urlunsplit((scheme, parts.netloc, path, query, ""))


def channel_topic(channel: str) -> str:
    return f"{TOPIC_PREFIX}{channel}"


class RealtimeFeed:
    """One websocket shared by every subscribed broadcast channel.

    ``subscribe`` joins the channel right away when connected, otherwise on
    the next open. Reconnects re-join every channel that still has
    subscribers. Hub callbacks run on the socket thread.
    """

    def __init__(
        self,
        url: str,
        hub: BroadcastHub,
        *,
        socket_factory: SocketFactory = websocket.WebSocketApp,
        heartbeat_s: float = HEARTBEAT_SECONDS,
        reconnect_s: int = RECONNECT_SECONDS,
    ) -> None:
        self.url = url
        self._hub = hub
        self._socket_factory = socket_factory
        self._heartbeat_s = heartbeat_s
        self._reconnect_s = reconnect_s

        self._lock = threading.RLock()
        self._refs = itertools.count(1)
        self._channels: Dict[str, int] = {}
        self._socket: Any = None
        self._connected = False
        self._stopping = threading.Event()
        self._threads: List[threading.Thread] = []

    @classmethod
    def from_config(cls, config: Any, hub: BroadcastHub) -> "RealtimeFeed":
        return cls(realtime_url(config.backend_url, config.backend_key), hub)

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def channels(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._channels)

    # -- subscriptions ------------------------------------------------------

    def subscribe(self, channel: str, event: str, callback: EventCallback) -> Callable[[], None]:
        unsubscribe_hub = self._hub.subscribe(channel, event, callback)
        with self._lock:
            first = channel not in self._channels
            self._channels[channel] = self._channels.get(channel, 0) + 1
        if first:
            self._join(channel)
        released = False

        def _unsubscribe() -> None:
            nonlocal released
            if released:
                return
            released = True
            unsubscribe_hub()
            self._release(channel)

        return _unsubscribe

    def _release(self, channel: str) -> None:
        with self._lock:
            count = self._channels.get(channel, 0) - 1
            if count > 0:
                self._channels[channel] = count
                return
            self._channels.pop(channel, None)
        self._send(channel_topic(channel), "phx_leave", {})

    def _join(self, channel: str) -> None:
        payload = {"config": {"broadcast": {"self": False}, "presence": {"key": ""}}}
        if self._send(channel_topic(channel), "phx_join", payload):
            logger.debug("Joining realtime channel %s", channel)

    # -- lifecycle ----------------------------------------------------------

    def start(self) -> None:
        with self._lock:
            if self._socket is not None:
                return
            self._stopping.clear()
            self._socket = self._socket_factory(
                self.url,
                on_open=self._on_open,
                on_message=self._on_message,
                on_error=self._on_error,
                on_close=self._on_close,
            )
        self._threads = [
            threading.Thread(target=self._run, name="realtime-feed", daemon=True),
            threading.Thread(target=self._heartbeat, name="realtime-heartbeat", daemon=True),
        ]
        for thread in self._threads:
            thread.start()
        logger.info("Realtime feed started")

    def stop(self) -> None:
        self._stopping.set()
        with self._lock:
            sock, self._socket = self._socket, None
            self._connected = False
        if sock is not None:
            sock.close()
        threads, self._threads = self._threads, []
        for thread in threads:
            if thread is not threading.current_thread():
                thread.join(timeout=1.0)

    def _run(self) -> None:
        sock = self._socket
        if sock is None:
            return
        try:
            sock.run_forever(reconnect=self._reconnect_s)
        except Exception:
            logger.exception("Realtime socket loop crashed")

    def _heartbeat(self) -> None:
        while not self._stopping.wait(self._heartbeat_s):
            self._send(PHOENIX_TOPIC, "heartbeat", {})

    # -- socket callbacks ---------------------------------------------------

    def _on_open(self, _ws: Any) -> None:
        with self._lock:
            self._connected = True
            channels = list(self._channels)
        logger.info("Realtime connected, joining %d channel(s)", len(channels))
        for channel in channels:
            self._join(channel)

    def _on_message(self, _ws: Any, message: Any) -> None:
        self.handle_frame(message)

    def _on_error(self, _ws: Any, error: Any) -> None:
        logger.warning("Realtime socket error: %s", error)

    def _on_close(self, _ws: Any, status: Any = None, reason: Any = None) -> None:
        self._connected = False
        logger.info("Realtime socket closed (%s %s)", status, reason)

    def handle_frame(self, message: Any) -> bool:
        """Publish a ``broadcast`` frame into the hub; True when one was delivered."""

        try:
            frame = json.loads(message)
        except (TypeError, ValueError):
            logger.debug("Ignoring unreadable realtime frame: %r", message)
            return False
        if not isinstance(frame, Mapping):
            return False
        topic = str(frame.get("topic") or "")
        event = frame.get("event")
        payload = frame.get("payload")
        if event in ("phx_reply", "phx_error"):
            status = payload.get("status") if isinstance(payload, Mapping) else None
            if event == "phx_error" or status != "ok":
                logger.warning("Realtime %s on %s: %r", event, topic, payload)
            return False
        if event != "broadcast" or not topic.startswith(TOPIC_PREFIX):
            return False
        if not isinstance(payload, Mapping) or not payload.get("event"):
            return False
        body = payload.get("payload")
        channel = topic[len(TOPIC_PREFIX):]
        self._hub.publish(channel, str(payload["event"]), body if isinstance(body, Mapping) else {})
        return True

    def _send(self, topic: str, event: str, payload: Mapping[str, Any]) -> bool:
        with self._lock:
            sock = self._socket if self._connected else None
            ref = str(next(self._refs))
        if sock is None:
            return False
        frame = {"topic": topic, "event": event, "payload": dict(payload), "ref": ref}
        try:
            sock.send(json.dumps(frame))
        except (websocket.WebSocketException, OSError) as exc:
            logger.warning("Realtime send of %s to %s failed: %s", event, topic, exc)
            return False
        return True


__all__ = ["RealtimeFeed", "realtime_url", "channel_topic", "HEARTBEAT_SECONDS"]
