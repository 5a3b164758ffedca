"""Raw keyboard event to canonical key translation."""

from __future__ import annotations

from keyboard_control.api.key_events import KeyboardEvent, KeyMapper


def default_key_mapper(event: KeyboardEvent) -> str:
    """Map the event's numeric code to its character."""
    code = event.code
    if not isinstance(code, int) or code <= 0 or code > 0x10FFFF:
        return ""
    return chr(code)


def key_name_mapper(event: KeyboardEvent) -> str:
    """Use the host-provided key name as canonical key."""
    return event.key


__all__ = ["KeyMapper", "default_key_mapper", "key_name_mapper"]
