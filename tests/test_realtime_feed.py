import json

from logic.alert_banner import AlertBannerModel
from services.alert_feed import BroadcastHub
from services.realtime_feed import RealtimeFeed, realtime_url


class FakeSocket:
    """Records what the feed sends; tests drive the socket callbacks."""

    def __init__(self, url, on_open, on_message, on_error, on_close):
        self.url = url
        self.on_open = on_open
        self.on_message = on_message
        self.on_error = on_error
        self.on_close = on_close
        self.sent = []
        self.closed = False
        self.run_kwargs = None

    def run_forever(self, **kwargs):
        self.run_kwargs = kwargs

    def send(self, text):
        self.sent.append(json.loads(text))

    def close(self):
        self.closed = True

    def events(self):
        return [(frame["topic"], frame["event"]) for frame in self.sent]


def _feed(hub=None):
    sockets = []

    def factory(url, **callbacks):
        sock = FakeSocket(url, **callbacks)
        sockets.append(sock)
        return sock

    feed = RealtimeFeed("ws://example.test/socket", hub or BroadcastHub(), socket_factory=factory, heartbeat_s=60)
    return feed, sockets


def _broadcast(channel, event, body):
    return json.dumps(
        {
            "topic": f"realtime:{channel}",
            "event": "broadcast",
            "payload": {"type": "broadcast", "event": event, "payload": body},
            "ref": None,
        }
    )


def test_realtime_url_uses_websocket_scheme():
    url = realtime_url("https://abc.example.co", "anon-key")

    assert url == "wss://abc.example.co/realtime/v1/websocket?apikey=anon-key&vsn=1.0.0"
    assert realtime_url("http://localhost:54321/", "k").startswith("ws://localhost:54321/realtime/v1/websocket?")


def test_subscribed_channels_are_joined_on_open():
    feed, sockets = _feed()
    feed.subscribe("courier-abc", "new_alert", lambda payload: None)

    feed.start()
    sock = sockets[0]
    assert sock.sent == []

    sock.on_open(sock)

    assert feed.connected
    assert sock.events() == [("realtime:courier-abc", "phx_join")]
    feed.stop()
    assert sock.closed
    assert not feed.connected


def test_reconnect_rejoins_and_last_unsubscribe_leaves():
    feed, sockets = _feed()
    first = feed.subscribe("courier-abc", "new_alert", lambda payload: None)
    second = feed.subscribe("courier-abc", "new_alert", lambda payload: None)
    feed.start()
    sock = sockets[0]
    sock.on_open(sock)
    sock.on_close(sock, 1006, "gone")
    sock.on_open(sock)

    first()
    first()
    assert feed.channels == ("courier-abc",)
    second()

    assert feed.channels == ()
    assert sock.events() == [
        ("realtime:courier-abc", "phx_join"),
        ("realtime:courier-abc", "phx_join"),
        ("realtime:courier-abc", "phx_leave"),
    ]
    feed.stop()


def test_broadcast_frame_reaches_alert_banner(scheduler):
    hub = BroadcastHub()
    feed, sockets = _feed(hub)
    changes = []
    banner = AlertBannerModel(feed, "abc", scheduler=scheduler, hide_after_ms=10_000, on_change=changes.append)
    banner.start()
    feed.start()
    sock = sockets[0]
    sock.on_open(sock)

    sock.on_message(sock, _broadcast("courier-abc", "new_alert", {"message": "Ambil pesanan di dapur", "sent_at": "2024-05-01T08:00:00Z"}))

    assert banner.visible
    assert banner.alert.message == "Ambil pesanan di dapur"
    assert banner.alert.sent_at == "2024-05-01T08:00:00Z"
    assert changes

    banner.close()
    feed.stop()
    assert hub.subscriber_count("courier-abc", "new_alert") == 0


def test_other_frames_are_not_published():
    hub = BroadcastHub()
    received = []
    hub.subscribe("courier-abc", "new_alert", received.append)
    feed, _sockets = _feed(hub)

    assert not feed.handle_frame("not json")
    assert not feed.handle_frame(json.dumps({"topic": "realtime:courier-abc", "event": "phx_reply", "payload": {"status": "ok"}}))
    assert not feed.handle_frame(json.dumps({"topic": "phoenix", "event": "broadcast", "payload": {"event": "new_alert"}}))
    assert feed.handle_frame(_broadcast("courier-abc", "new_alert", {"message": "hi"}))

    assert received == [{"message": "hi"}]


def test_sends_are_skipped_while_disconnected():
    feed, sockets = _feed()
    feed.start()
    sock = sockets[0]

    feed.subscribe("courier-xyz", "new_alert", lambda payload: None)

    assert sock.sent == []
    feed.stop()
    assert sock.run_kwargs == {"reconnect": 5}
