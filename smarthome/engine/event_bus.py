"""
Event bus for the smart home simulator.

The event bus is how command outcomes leave the runner. Echoed commands,
errors, removals, reports and fired switches are all published here, and
whatever writes the output subscribes to it.

The bus does not format events and does not filter them. It delivers every
event to every subscriber.
"""

from collections.abc import Callable
from typing import Any

Event = dict[str, Any]
Subscriber = Callable[[Event], None]


class EventBus:
    """
    Synchronous publish-subscribe bus.

    Subscribers are called in the order they subscribed. An exception in a
    subscriber stops delivery of that event and reaches the publisher.
    """

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []
        self._closed: bool = False

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, handler: Subscriber) -> None:
        if self._closed:
            raise RuntimeError("Cannot subscribe to a closed event bus")

        self._subscribers.append(handler)

    def publish(self, event: Event) -> None:
        if self._closed:
            raise RuntimeError("Cannot publish to a closed event bus")

        for handler in self._subscribers:
            handler(event)

    def close(self) -> None:
        """
        Close the bus at the end of a run.

        No further subscriptions or publications are accepted afterwards.
        """
        self._closed = True
