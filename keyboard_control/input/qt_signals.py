"""PyQt6-backed key and tick signal sources."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from keyboard_control.api.key_events import KEY_DOWN, KEY_UP, KeyboardEvent
from keyboard_control.api.signals import Subscription
from keyboard_control.runtime.signals import RuntimeSignal

try:
    from PyQt6.QtCore import QEvent, QObject, Qt, QTimer
except Exception as exc:  # pragma: no cover
    raise RuntimeError("PyQt6 is required for Qt key signals. Install dependency 'PyQt6'.") from exc

_MODIFIER_NAMES: tuple[tuple[Qt.KeyboardModifier, str], ...] = (
    (Qt.KeyboardModifier.ShiftModifier, "Shift"),
    (Qt.KeyboardModifier.ControlModifier, "Control"),
    (Qt.KeyboardModifier.AltModifier, "Alt"),
    (Qt.KeyboardModifier.MetaModifier, "Meta"),
)


def keyboard_event_from_qt(event: Any, event_type: str) -> KeyboardEvent:
    """Convert a QKeyEvent; Qt letter and digit codes match ASCII."""
    modifiers = event.modifiers()
    return KeyboardEvent(
        event_type=event_type,
        code=int(event.key()),
        key=str(event.text()),
        modifiers=tuple(name for flag, name in _MODIFIER_NAMES if modifiers & flag),
    )


class _KeyEventFilter(QObject):
    def __init__(self, on_event: Callable[[str, Any], None], parent: QObject) -> None:
        # Parented to the watched widget so Qt keeps the filter alive.
        super().__init__(parent)
        self._on_event = on_event

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # type: ignore[override]
        del watched
        event_type = event.type()
        if event_type == QEvent.Type.KeyPress:
            self._on_event(KEY_DOWN, event)
        elif event_type == QEvent.Type.KeyRelease:
            self._on_event(KEY_UP, event)
        return False


class QtKeySignals:
    """Key-down and key-up sources fed by an event filter on one widget."""

    def __init__(self, widget: QObject) -> None:
        self._widget = widget
        self.key_down = RuntimeSignal()
        self.key_up = RuntimeSignal()
        self._filter = _KeyEventFilter(self._dispatch, widget)
        widget.installEventFilter(self._filter)

    def close(self) -> None:
        self._widget.removeEventFilter(self._filter)

    def _dispatch(self, event_type: str, event: Any) -> None:
        # Held keys auto-repeat press/release pairs; the engine tracks holds itself.
        if event.isAutoRepeat():
            return
        signal = self.key_down if event_type == KEY_DOWN else self.key_up
        signal.emit(keyboard_event_from_qt(event, event_type))


class QtTimerSignal:
    """Per-frame tick source driven by a QTimer."""

    def __init__(
        self,
        timer: QTimer | None = None,
        *,
        interval_ms: int = 16,
        parent: QObject | None = None,
    ) -> None:
        self._signal = RuntimeSignal()
        self._timer = timer if timer is not None else QTimer(parent)
        if timer is None:
            self._timer.setInterval(max(1, int(interval_ms)))
        self._timer.timeout.connect(self._on_timeout)

    def subscribe(self, handler: Callable[..., Any]) -> Subscription:
        return self._signal.subscribe(handler)

    def unsubscribe(self, subscription: Subscription) -> None:
        self._signal.unsubscribe(subscription)

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def _on_timeout(self) -> None:
        self._signal.emit()
