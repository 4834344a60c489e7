"""Unit tests for the replaying broadcast channel."""

from __future__ import annotations

from page_model_service.broadcast import ReplayChannel


def test_subscribe_replays_current_value() -> None:
    channel: ReplayChannel[int] = ReplayChannel(1)
    received: list[int] = []

    channel.subscribe(received.append)

    assert received == [1]


def test_publish_reaches_all_subscribers_in_order() -> None:
    channel: ReplayChannel[str | None] = ReplayChannel(None)
    calls: list[tuple[str, str | None]] = []
    channel.subscribe(lambda value: calls.append(("first", value)))
    channel.subscribe(lambda value: calls.append(("second", value)))

    channel.publish("model")

    assert calls[-2:] == [("first", "model"), ("second", "model")]
    assert channel.value == "model"


def test_late_subscriber_gets_latest_value_only() -> None:
    channel: ReplayChannel[int] = ReplayChannel(0)
    channel.publish(1)
    channel.publish(2)
    received: list[int] = []

    channel.subscribe(received.append)

    assert received == [2]


def test_unsubscribe_stops_delivery_and_is_idempotent() -> None:
    channel: ReplayChannel[int] = ReplayChannel(0)
    received: list[int] = []
    subscription = channel.subscribe(received.append)

    subscription.unsubscribe()
    subscription.unsubscribe()
    channel.publish(5)

    assert received == [0]
    assert subscription.closed
    assert channel.subscriber_count == 0


def test_unsubscribe_during_publish_does_not_skip_others() -> None:
    channel: ReplayChannel[int] = ReplayChannel(0)
    received: list[int] = []
    holder: dict = {}

    def once(value: int) -> None:
        if value:
            holder["subscription"].unsubscribe()

    holder["subscription"] = channel.subscribe(once)
    channel.subscribe(received.append)

    channel.publish(1)
    channel.publish(2)

    assert received == [0, 1, 2]
    assert channel.subscriber_count == 1


def test_failing_subscriber_does_not_break_publish() -> None:
    channel: ReplayChannel[int] = ReplayChannel(0)
    received: list[int] = []

    def explode(value: int) -> None:
        if value:
            raise RuntimeError("subscriber bug")

    channel.subscribe(explode)
    channel.subscribe(received.append)

    channel.publish(3)

    assert received == [0, 3]
