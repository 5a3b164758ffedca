"""Host input and tick source adapters."""

from keyboard_control.input.rendercanvas_signals import (
    CanvasSignal,
    CanvasSignals,
    create_canvas_signals,
    focus_canvas,
)

__all__ = ["CanvasSignal", "CanvasSignals", "create_canvas_signals", "focus_canvas"]
