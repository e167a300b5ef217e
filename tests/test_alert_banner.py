from logic.alert_banner import ALERT_EVENT, Alert, AlertBannerModel, courier_channel
from services.alert_feed import BroadcastHub


def _make(scheduler, token="tok-1", hide_after_ms=10_000):
    hub = BroadcastHub()
    changes = []
    model = AlertBannerModel(
        hub,
        token,
        scheduler=scheduler,
        hide_after_ms=hide_after_ms,
        on_change=lambda m: changes.append(m.visible),
    )
    return hub, model, changes


def test_alert_payload_parsing():
    assert Alert.from_payload({"message": "Ambil paket"}) == Alert("Ambil paket")
    assert Alert.from_payload({"payload": {"message": "x", "sent_at": "10:00"}}) == Alert("x", "10:00")
    assert Alert.from_payload({"message": ""}) is None
    assert Alert.from_payload({"payload": "junk"}) is None


def test_alert_shows_then_hides_after_timeout(scheduler):
    hub, model, changes = _make(scheduler)
    model.start()

    hub.publish(courier_channel("tok-1"), ALERT_EVENT, {"message": "Segera ke gudang"})

    assert model.visible
    assert model.alert.message == "Segera ke gudang"
    scheduler.advance(9_999)
    assert model.visible
    scheduler.advance(1)
    assert not model.visible
    assert changes == [True, False]


def test_new_alert_replaces_old_and_restarts_timer(scheduler):
    hub, model, _changes = _make(scheduler)
    model.start()
    channel = courier_channel("tok-1")

    hub.publish(channel, ALERT_EVENT, {"message": "first"})
    scheduler.advance(8_000)
    hub.publish(channel, ALERT_EVENT, {"message": "second"})
    scheduler.advance(8_000)

    assert model.visible
    assert model.alert.message == "second"
    scheduler.advance(2_000)
    assert not model.visible


def test_dismiss_hides_and_cancels_timer(scheduler):
    hub, model, _changes = _make(scheduler)
    model.start()
    hub.publish(courier_channel("tok-1"), ALERT_EVENT, {"message": "x"})

    model.dismiss()

    assert not model.visible
    assert scheduler.active == []


def test_other_couriers_alerts_are_ignored(scheduler):
    hub, model, changes = _make(scheduler)
    model.start()

    hub.publish(courier_channel("someone-else"), ALERT_EVENT, {"message": "x"})

    assert not model.visible
    assert changes == []


def test_empty_token_never_subscribes(scheduler):
    hub, model, _changes = _make(scheduler, token="")

    model.start()

    assert not model.subscribed
    assert hub.subscriber_count(courier_channel(""), ALERT_EVENT) == 0


def test_close_unsubscribes_and_cancels_timer(scheduler):
    hub, model, _changes = _make(scheduler)
    model.start()
    model.start()
    channel = courier_channel("tok-1")
    assert hub.subscriber_count(channel, ALERT_EVENT) == 1
    hub.publish(channel, ALERT_EVENT, {"message": "x"})

    model.close()

    assert hub.subscriber_count(channel, ALERT_EVENT) == 0
    assert scheduler.active == []
    assert hub.publish(channel, ALERT_EVENT, {"message": "y"}) == 0
    assert model.alert.message == "x"
