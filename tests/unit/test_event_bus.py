from __future__ import annotations

from plastic_detection_client.shared.bus import EventBus


def test_event_bus_publish_and_unsubscribe() -> None:
    bus: EventBus[str] = EventBus()
    received: list[str] = []

    unsubscribe = bus.subscribe("client.state", received.append)
    bus.publish("client.state", "ready")
    bus.publish("other", "ignored")
    assert received == ["ready"]
    assert bus.listener_count("client.state") == 1

    unsubscribe()
    unsubscribe()
    bus.publish("client.state", "pending")
    assert received == ["ready"]
    assert bus.listener_count("client.state") == 0


def test_listener_may_unsubscribe_while_publishing() -> None:
    bus: EventBus[int] = EventBus()
    received: list[int] = []

    def once(event: int) -> None:
        received.append(event)
        bus.unsubscribe("topic", once)

    bus.subscribe("topic", once)
    bus.publish("topic", 1)
    bus.publish("topic", 2)

    assert received == [1]
