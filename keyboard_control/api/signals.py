"""Public signal-source contracts for input and tick delivery."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int


class SignalSource(Protocol):
    """Host-owned event source the dispatch engine attaches to."""

    def subscribe(self, handler: Callable[..., Any]) -> Subscription:
        """Register handler and return its token."""

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a registration if present."""


ContextRunner = Callable[[Callable[[], None]], Any]


def create_signal() -> "SignalSource":
    """Create default in-process signal implementation."""
    from keyboard_control.runtime.signals import RuntimeSignal

    return RuntimeSignal()


__all__ = ["ContextRunner", "SignalSource", "Subscription", "create_signal"]
