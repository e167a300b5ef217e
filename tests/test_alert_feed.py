from services.alert_feed import BroadcastHub, broadcast_hub


def test_publish_reaches_only_matching_topic():
    hub = BroadcastHub()
    seen = []
    hub.subscribe("courier-a", "new_alert", seen.append)
    hub.subscribe("courier-b", "new_alert", lambda _p: seen.append("wrong"))

    delivered = hub.publish("courier-a", "new_alert", {"message": "hi"})

    assert delivered == 1
    assert seen == [{"message": "hi"}]


def test_unsubscribe_closure_stops_delivery():
    hub = BroadcastHub()
    seen = []
    unsubscribe = hub.subscribe("c", "e", seen.append)

    unsubscribe()
    unsubscribe()

    assert hub.publish("c", "e", {"x": 1}) == 0
    assert hub.subscriber_count("c", "e") == 0
    assert seen == []


def test_failing_subscriber_does_not_block_others():
    hub = BroadcastHub()
    seen = []

    def broken(_payload):
        raise RuntimeError("subscriber bug")

    hub.subscribe("c", "e", broken)
    hub.subscribe("c", "e", seen.append)

    assert hub.publish("c", "e") == 2
    assert seen == [{}]


def test_process_hub_is_shared():
    assert broadcast_hub() is broadcast_hub()
