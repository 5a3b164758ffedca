"""Per-key activation state contracts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from keyboard_control.api.bindings import Binding
from keyboard_control.api.key_events import KeyboardEvent


class KeyState(Enum):
    """Activation state of one bound key."""

    RELEASED = "released"
    PRESSED = "pressed"
    IGNORED = "ignored"


@dataclass(frozen=True, slots=True)
class KeyRunState:
    """Runtime record for one key of the installed binding set."""

    state: KeyState = KeyState.RELEASED
    binding: Binding | None = None
    event: KeyboardEvent | None = None


RELEASED_STATE = KeyRunState()

__all__ = ["KeyRunState", "KeyState", "RELEASED_STATE"]
