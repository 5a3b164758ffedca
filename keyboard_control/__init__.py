"""Keyboard-to-action dispatch engine."""

from keyboard_control.api import (
    Binding,
    BindingDefinitionError,
    BuiltinAction,
    CallbackAction,
    KeyboardControl,
    KeyboardEvent,
    KeyState,
    create_canvas_keyboard_control,
    create_keyboard_control,
    create_qt_keyboard_control,
)

__all__ = [
    "Binding",
    "BindingDefinitionError",
    "BuiltinAction",
    "CallbackAction",
    "KeyState",
    "KeyboardControl",
    "KeyboardEvent",
    "create_canvas_keyboard_control",
    "create_keyboard_control",
    "create_qt_keyboard_control",
]
