"""Public keyboard event types."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

KEY_DOWN = "key_down"
KEY_UP = "key_up"


@dataclass(frozen=True, slots=True)
class KeyboardEvent:
    """Raw key event as delivered by a host input source."""

    event_type: str
    code: int
    key: str = ""
    modifiers: tuple[str, ...] = ()


KeyMapper = Callable[[KeyboardEvent], str]

__all__ = ["KEY_DOWN", "KEY_UP", "KeyMapper", "KeyboardEvent"]
