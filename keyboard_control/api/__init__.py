"""Public keyboard-control API contracts."""

from keyboard_control.api.bindings import (
    ActionHandler,
    Binding,
    BindingSet,
    BuiltinAction,
    BuiltinActionFn,
    CallbackAction,
    CompletionHandler,
    ParamsProvider,
    Validator,
    parse_binding,
    parse_binding_set,
)
from keyboard_control.api.errors import BindingDefinitionError, KeyboardControlError
from keyboard_control.api.key_events import KEY_DOWN, KEY_UP, KeyboardEvent, KeyMapper
from keyboard_control.api.key_state import KeyRunState, KeyState
from keyboard_control.api.keyboard_control import (
    KeyboardControl,
    create_canvas_keyboard_control,
    create_keyboard_control,
    create_qt_keyboard_control,
)
from keyboard_control.api.logging import LoggingConfig, configure_logging
from keyboard_control.api.signals import ContextRunner, SignalSource, Subscription, create_signal

__all__ = [
    "ActionHandler",
    "Binding",
    "BindingDefinitionError",
    "BindingSet",
    "BuiltinAction",
    "BuiltinActionFn",
    "CallbackAction",
    "CompletionHandler",
    "ContextRunner",
    "KEY_DOWN",
    "KEY_UP",
    "KeyMapper",
    "KeyRunState",
    "KeyState",
    "KeyboardControl",
    "KeyboardControlError",
    "KeyboardEvent",
    "LoggingConfig",
    "ParamsProvider",
    "SignalSource",
    "Subscription",
    "Validator",
    "configure_logging",
    "create_canvas_keyboard_control",
    "create_keyboard_control",
    "create_qt_keyboard_control",
    "create_signal",
    "parse_binding",
    "parse_binding_set",
]
