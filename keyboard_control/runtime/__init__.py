"""Keyboard-control runtime modules."""

from keyboard_control.api.signals import Subscription
from keyboard_control.runtime.action_executor import ActionExecutor
from keyboard_control.runtime.binding_registry import BindingRegistry
from keyboard_control.runtime.config import KeyboardControlConfig, load_keyboard_control_config
from keyboard_control.runtime.key_mapping import default_key_mapper, key_name_mapper
from keyboard_control.runtime.key_state import KeyStateTracker
from keyboard_control.runtime.keyboard_control import KeyboardControl
from keyboard_control.runtime.logging import reset_logging, setup_logging
from keyboard_control.runtime.params import resolve_params
from keyboard_control.runtime.signals import Signal

__all__ = [
    "ActionExecutor",
    "BindingRegistry",
    "KeyStateTracker",
    "KeyboardControl",
    "KeyboardControlConfig",
    "Signal",
    "Subscription",
    "default_key_mapper",
    "key_name_mapper",
    "load_keyboard_control_config",
    "reset_logging",
    "resolve_params",
    "setup_logging",
]
