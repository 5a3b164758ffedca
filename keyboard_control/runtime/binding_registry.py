"""Lookup of the active binding set by canonical key."""

from __future__ import annotations

from collections.abc import Mapping

from keyboard_control.api.bindings import Binding


class BindingRegistry:
    """Immutable view over one installed binding set."""

    def __init__(self, bindings: Mapping[str, Binding]) -> None:
        self._bindings: dict[str, Binding] = dict(bindings)

    def lookup(self, key: str) -> Binding | None:
        """Return binding for key, or None for unbound keys."""
        return self._bindings.get(key)

    def keys(self) -> tuple[str, ...]:
        """Return bound keys in declared order."""
        return tuple(self._bindings)

    def __contains__(self, key: object) -> bool:
        return key in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)
