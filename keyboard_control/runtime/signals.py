"""In-process signal primitive for hosts without a native event source."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from keyboard_control.api.signals import Subscription


class RuntimeSignal:
    """Ordered multi-subscriber signal invoked synchronously on emit."""

    def __init__(self) -> None:
        self._next_id = 1
        self._handlers: dict[int, Callable[..., Any]] = {}

    def subscribe(self, handler: Callable[..., Any]) -> Subscription:
        sub_id = self._next_id
        self._next_id += 1
        self._handlers[sub_id] = handler
        return Subscription(sub_id)

    def unsubscribe(self, subscription: Subscription) -> None:
        self._handlers.pop(subscription.id, None)

    def emit(self, *args: Any) -> int:
        """Invoke every handler with args and return number of invoked handlers."""
        invoked = 0
        for handler in tuple(self._handlers.values()):
            handler(*args)
            invoked += 1
        return invoked

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)


Signal = RuntimeSignal
