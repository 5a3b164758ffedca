"""Public keyboard-control error types."""

from __future__ import annotations


class KeyboardControlError(Exception):
    """Base error raised by keyboard-control configuration paths."""


class BindingDefinitionError(KeyboardControlError, ValueError):
    """Raised when a binding definition cannot be resolved at install time."""


__all__ = ["BindingDefinitionError", "KeyboardControlError"]
