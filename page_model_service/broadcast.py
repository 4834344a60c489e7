"""Publish/subscribe channel that replays its latest value to new subscribers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from page_model_service.logging_utils import create_service_logger

T = TypeVar("T")

logger = create_service_logger("page_model.broadcast")


class Subscription(Generic[T]):
    """Handle returned by ``ReplayChannel.subscribe``."""

    def __init__(self, channel: ReplayChannel[T], callback: Callable[[T], None]) -> None:
        self._channel = channel
        self._callback = callback
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def unsubscribe(self) -> None:
        """Stop receiving values. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._channel._detach(self)

    def _deliver(self, value: T) -> None:
        if self._closed:
            return
        try:
            self._callback(value)
        except Exception as e:
            # One failing subscriber must not starve the rest or fail the publisher
            logger.error(f"Subscriber callback failed: {e}", exc_info=True)


class ReplayChannel(Generic[T]):
    """Holds the latest value and pushes every new one to subscribers.

    New subscribers immediately receive the current value, then each
    subsequently published value, in subscription order.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._subscriptions: list[Subscription[T]] = []

    @property
    def value(self) -> T:
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription[T]:
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        subscription._deliver(self._value)
        return subscription

    def publish(self, value: T) -> None:
        self._value = value
        for subscription in list(self._subscriptions):
            subscription._deliver(value)

    def _detach(self, subscription: Subscription[T]) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            pass
