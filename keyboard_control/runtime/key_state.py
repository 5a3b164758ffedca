"""Per-key press/release/cancel state machine."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from keyboard_control.api.bindings import Binding
from keyboard_control.api.key_events import KeyboardEvent
from keyboard_control.api.key_state import RELEASED_STATE, KeyRunState, KeyState


class KeyStateTracker:
    """Key run-state table for one installed binding set.

    The table is allocated once with every key released. A new binding set
    gets a new tracker; entries are never added or removed afterwards.
    """

    def __init__(self, keys: Iterable[str]) -> None:
        self._states: dict[str, KeyRunState] = {key: RELEASED_STATE for key in keys}

    def state_of(self, key: str) -> KeyRunState | None:
        """Return run state for key, or None when key is not tracked."""
        return self._states.get(key)

    def keys(self) -> tuple[str, ...]:
        return tuple(self._states)

    def on_key_down(
        self,
        key: str,
        binding: Binding,
        event: KeyboardEvent,
        accept: Callable[[], bool],
    ) -> KeyState | None:
        """Apply a key press.

        ``accept`` runs the binding validation and is skipped while the key is
        ignored. A rejected press leaves the state unchanged; an accepted one
        (re)snapshots binding and event.
        """
        current = self._states.get(key)
        if current is None:
            return None
        if current.state is KeyState.IGNORED:
            return current.state
        if accept() is not True:
            return current.state
        self._states[key] = KeyRunState(KeyState.PRESSED, binding, event)
        return KeyState.PRESSED

    def on_key_up(self, key: str) -> KeyRunState | None:
        """Release key and return the run state it left."""
        current = self._states.get(key)
        if current is None:
            return None
        self._states[key] = RELEASED_STATE
        return current

    def cancel(self, key: str) -> bool:
        """Move a pressed key to ignored until its next release."""
        current = self._states.get(key)
        if current is None or current.state is not KeyState.PRESSED:
            return False
        self._states[key] = KeyRunState(KeyState.IGNORED, current.binding, current.event)
        return True

    def pressed(self) -> tuple[tuple[str, KeyRunState], ...]:
        """Snapshot pressed keys in declared order."""
        return tuple(
            (key, run_state)
            for key, run_state in self._states.items()
            if run_state.state is KeyState.PRESSED
        )
