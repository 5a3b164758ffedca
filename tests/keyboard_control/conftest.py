from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from keyboard_control.api.key_events import KEY_DOWN, KEY_UP, KeyboardEvent
from keyboard_control.runtime.config import KeyboardControlConfig
from keyboard_control.runtime.keyboard_control import KeyboardControl
from keyboard_control.runtime.signals import Signal


class FakeCanvas:
    def __init__(self) -> None:
        self.handlers: dict[str, list] = {}

    def add_event_handler(self, handler, event_type: str) -> None:
        self.handlers.setdefault(event_type, []).append(handler)

    def remove_event_handler(self, handler, event_type: str) -> None:
        handlers = self.handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event_type: str, **payload) -> None:
        event = {"event_type": event_type, **payload}
        for handler in tuple(self.handlers.get(event_type, [])):
            handler(event)


class FakeFocusWidget:
    def __init__(self) -> None:
        self.focus_calls = 0

    def setFocus(self) -> None:
        self.focus_calls += 1


class QtWrapperCanvas(FakeCanvas):
    """Qt canvases delegate input to a native subwidget."""

    def __init__(self) -> None:
        super().__init__()
        self._subwidget = FakeFocusWidget()


class GlfwCanvas(FakeCanvas):
    def __init__(self, window: object) -> None:
        super().__init__()
        self._window = window


@dataclass
class FakeController:
    calls: list[tuple[str, Any]] = field(default_factory=list)


@dataclass
class Harness:
    controller: FakeController
    key_down: Signal
    key_up: Signal
    tick: Signal
    control: KeyboardControl

    def press(self, key: str) -> None:
        self.key_down.emit(key_event(KEY_DOWN, key))

    def release(self, key: str) -> None:
        self.key_up.emit(key_event(KEY_UP, key))

    def frame(self, count: int = 1) -> None:
        for _ in range(count):
            self.tick.emit()


def key_event(event_type: str, key: str) -> KeyboardEvent:
    return KeyboardEvent(event_type, ord(key), key)


def make_harness(
    builtin_actions: dict | None = None,
    *,
    context_runner=None,
    trace_enabled: bool = False,
) -> Harness:
    controller = FakeController()
    key_down = Signal()
    key_up = Signal()
    tick = Signal()
    control = KeyboardControl(
        controller=controller,
        key_down=key_down,
        key_up=key_up,
        tick=tick,
        builtin_actions=builtin_actions,
        context_runner=context_runner,
        config=KeyboardControlConfig(trace_enabled=trace_enabled),
    )
    return Harness(controller, key_down, key_up, tick, control)


@pytest.fixture
def harness() -> Harness:
    return make_harness()
