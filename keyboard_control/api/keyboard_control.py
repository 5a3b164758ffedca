"""Public keyboard-control API contracts."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from keyboard_control.api.bindings import BindingSet, BuiltinActionFn
from keyboard_control.api.key_events import KeyMapper
from keyboard_control.api.key_state import KeyState
from keyboard_control.api.signals import ContextRunner, SignalSource

if TYPE_CHECKING:
    from keyboard_control.runtime.config import KeyboardControlConfig


@runtime_checkable
class KeyboardControl(Protocol):
    """Keyboard-to-action dispatch engine contract."""

    @property
    def is_installed(self) -> bool:
        """Return whether a binding set is installed."""

    def install(
        self,
        bindings: BindingSet | None,
        key_mapper: KeyMapper | None = None,
        run_outside_main_context: bool = False,
    ) -> None:
        """Install or replace the binding set; an empty set removes controls."""

    def remove(self) -> None:
        """Detach from event sources and drop all bindings."""

    def state_of(self, key: str) -> KeyState | None:
        """Return activation state for a bound key."""

    def installed_keys(self) -> tuple[str, ...]:
        """Return bound keys in declared order."""


def create_keyboard_control(
    *,
    controller: Any,
    key_down: SignalSource,
    key_up: SignalSource,
    tick: SignalSource,
    builtin_actions: Mapping[int, BuiltinActionFn] | None = None,
    context_runner: ContextRunner | None = None,
    config: KeyboardControlConfig | None = None,
) -> KeyboardControl:
    """Create default dispatch engine implementation.

    Without ``config`` the engine reads ``KEYBOARD_CONTROL_*`` env vars. Logging
    is set up from the config unless the host already configured handlers.
    """
    from keyboard_control.runtime.config import load_keyboard_control_config
    from keyboard_control.runtime.keyboard_control import RuntimeKeyboardControl
    from keyboard_control.runtime.logging import setup_logging

    resolved = config if config is not None else load_keyboard_control_config()
    setup_logging(resolved)
    return RuntimeKeyboardControl(
        controller=controller,
        key_down=key_down,
        key_up=key_up,
        tick=tick,
        builtin_actions=builtin_actions,
        context_runner=context_runner,
        config=resolved,
    )


def create_canvas_keyboard_control(
    canvas: Any,
    *,
    controller: Any,
    builtin_actions: Mapping[int, BuiltinActionFn] | None = None,
    context_runner: ContextRunner | None = None,
    config: KeyboardControlConfig | None = None,
    focus_on_click: bool = True,
) -> KeyboardControl:
    """Create a dispatch engine fed by a rendercanvas canvas."""
    from keyboard_control.input.rendercanvas_signals import CanvasSignals

    signals = CanvasSignals(canvas, focus_on_click=focus_on_click)
    return create_keyboard_control(
        controller=controller,
        key_down=signals.key_down,
        key_up=signals.key_up,
        tick=signals.tick,
        builtin_actions=builtin_actions,
        context_runner=context_runner,
        config=config,
    )


def create_qt_keyboard_control(
    widget: Any,
    *,
    controller: Any,
    tick: SignalSource | None = None,
    interval_ms: int = 16,
    builtin_actions: Mapping[int, BuiltinActionFn] | None = None,
    context_runner: ContextRunner | None = None,
    config: KeyboardControlConfig | None = None,
) -> KeyboardControl:
    """Create a dispatch engine fed by key events of one Qt widget.

    Ticks come from ``tick`` when the host already has a frame signal,
    otherwise from a started QTimer owned by the widget.
    """
    from keyboard_control.input.qt_signals import QtKeySignals, QtTimerSignal

    keys = QtKeySignals(widget)
    if tick is None:
        timer_signal = QtTimerSignal(interval_ms=interval_ms, parent=widget)
        timer_signal.start()
        tick = timer_signal
    return create_keyboard_control(
        controller=controller,
        key_down=keys.key_down,
        key_up=keys.key_up,
        tick=tick,
        builtin_actions=builtin_actions,
        context_runner=context_runner,
        config=config,
    )


__all__ = [
    "KeyMapper",
    "KeyboardControl",
    "create_canvas_keyboard_control",
    "create_keyboard_control",
    "create_qt_keyboard_control",
]
