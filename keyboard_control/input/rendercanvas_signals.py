"""Rendercanvas-backed key and tick signal sources."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from keyboard_control.api.key_events import KEY_DOWN, KEY_UP, KeyboardEvent
from keyboard_control.api.signals import Subscription

_LOG = logging.getLogger(__name__)

# DOM-compatible codes for named keys so code-based mappers keep working.
NAMED_KEY_CODES: dict[str, int] = {
    "Backspace": 8,
    "Tab": 9,
    "Enter": 13,
    "Shift": 16,
    "Control": 17,
    "Alt": 18,
    "Pause": 19,
    "CapsLock": 20,
    "Escape": 27,
    "PageUp": 33,
    "PageDown": 34,
    "End": 35,
    "Home": 36,
    "ArrowLeft": 37,
    "ArrowUp": 38,
    "ArrowRight": 39,
    "ArrowDown": 40,
    "Insert": 45,
    "Delete": 46,
    "Meta": 91,
}


def parse_canvas_key_event(event: object, *, expected_type: str) -> KeyboardEvent | None:
    """Convert one canvas key event payload into a keyboard event."""
    if str(_event_value(event, "event_type", "")) != expected_type:
        return None
    key = _event_value(event, "key")
    if not isinstance(key, str) or not key:
        return None
    raw_modifiers = _event_value(event, "modifiers", ())
    modifiers = tuple(str(item) for item in raw_modifiers) if isinstance(raw_modifiers, (tuple, list)) else ()
    return KeyboardEvent(expected_type, key_code(key), key, modifiers)


def key_code(key: str) -> int:
    """Return numeric code for a canvas key name; 0 when unknown."""
    if len(key) == 1:
        return ord(key.upper())
    return NAMED_KEY_CODES.get(key, 0)


class CanvasSignal:
    """One canvas event type exposed as a signal source."""

    def __init__(
        self,
        canvas: Any,
        event_type: str,
        convert: Callable[[object], tuple[Any, ...] | None],
    ) -> None:
        if not callable(getattr(canvas, "add_event_handler", None)):
            raise RuntimeError("Canvas does not support event handlers.")
        self._canvas = canvas
        self._event_type = event_type
        self._convert = convert
        self._next_id = 1
        self._wrappers: dict[int, Callable[[object], None]] = {}

    def subscribe(self, handler: Callable[..., Any]) -> Subscription:
        convert = self._convert

        def wrapper(event: object) -> None:
            args = convert(event)
            if args is not None:
                handler(*args)

        sub_id = self._next_id
        self._next_id += 1
        self._wrappers[sub_id] = wrapper
        self._canvas.add_event_handler(wrapper, self._event_type)
        return Subscription(sub_id)

    def unsubscribe(self, subscription: Subscription) -> None:
        wrapper = self._wrappers.pop(subscription.id, None)
        if wrapper is None:
            return
        remove_handler = getattr(self._canvas, "remove_event_handler", None)
        if callable(remove_handler):
            remove_handler(wrapper, self._event_type)


class CanvasSignals:
    """Key-down, key-up and per-frame tick sources of one canvas."""

    def __init__(self, canvas: Any, *, focus_on_click: bool = True) -> None:
        self.canvas = canvas
        self.key_down = CanvasSignal(canvas, KEY_DOWN, _key_converter(KEY_DOWN))
        self.key_up = CanvasSignal(canvas, KEY_UP, _key_converter(KEY_UP))
        self.tick = CanvasSignal(canvas, "before_draw", lambda event: ())
        self._focus_handler: Callable[[object], None] | None = None
        if focus_on_click:
            self._focus_handler = self._on_pointer_down
            canvas.add_event_handler(self._focus_handler, "pointer_down")

    def close(self) -> None:
        """Stop focusing the canvas on click."""
        handler = self._focus_handler
        if handler is None:
            return
        self._focus_handler = None
        remove_handler = getattr(self.canvas, "remove_event_handler", None)
        if callable(remove_handler):
            remove_handler(handler, "pointer_down")

    def _on_pointer_down(self, event: object) -> None:
        _ = event
        if not focus_canvas(self.canvas):
            _LOG.debug("canvas_focus_unsupported backend=%s", type(self.canvas).__name__)


def focus_canvas(canvas: Any) -> bool:
    """Give keyboard focus to a Qt or GLFW backed canvas.

    Qt canvases wrap the native widget in ``_subwidget``; GLFW canvases keep
    the window handle in ``_window``. Returns False when neither applies.
    """
    widget = getattr(canvas, "_subwidget", None) or canvas
    set_focus = getattr(widget, "setFocus", None)
    if callable(set_focus):
        set_focus()
        return True
    window = getattr(canvas, "_window", None)
    if window is None:
        return False
    glfw = _glfw_api()
    if glfw is None:
        return False
    glfw.focus_window(window)
    return True


def _glfw_api() -> Any | None:
    try:
        import rendercanvas.glfw as rc_glfw
    except Exception:
        return None
    return rc_glfw.glfw


def create_canvas_signals(
    canvas: Any | None = None,
    *,
    width: int = 800,
    height: int = 600,
    title: str = "Keyboard Control",
) -> CanvasSignals:
    """Create signal sources over an existing or newly created rendercanvas canvas."""
    if canvas is not None:
        return CanvasSignals(canvas)
    try:
        import rendercanvas.auto as rc_auto
    except Exception as exc:
        raise RuntimeError(
            "Render canvas backend unavailable. Install a desktop backend such as glfw."
        ) from exc
    canvas_cls = getattr(rc_auto, "RenderCanvas", None)
    if canvas_cls is None:
        raise RuntimeError("rendercanvas.auto did not expose RenderCanvas.")
    canvas = canvas_cls(size=(int(width), int(height)), title=title, update_mode="continuous")
    _LOG.debug("canvas_created backend=%s", type(canvas).__name__)
    return CanvasSignals(canvas)


def _key_converter(expected_type: str) -> Callable[[object], tuple[KeyboardEvent] | None]:
    def convert(event: object) -> tuple[KeyboardEvent] | None:
        parsed = parse_canvas_key_event(event, expected_type=expected_type)
        return None if parsed is None else (parsed,)

    return convert


def _event_value(event: object, key: str, default: object | None = None) -> object | None:
    if isinstance(event, dict):
        return event.get(key, default)
    return getattr(event, key, default)
