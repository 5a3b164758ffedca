"""Binding parameter resolution."""

from __future__ import annotations

from typing import Any

from keyboard_control.api.bindings import Params, ParamsDefinition
from keyboard_control.api.key_events import KeyboardEvent


def resolve_params(
    params_def: ParamsDefinition,
    controller: Any,
    event: KeyboardEvent | None,
) -> Params:
    """Resolve static or provider-backed params; re-evaluated on every call."""
    if not params_def:
        return {}
    if callable(params_def):
        return params_def(controller, event)
    return params_def
