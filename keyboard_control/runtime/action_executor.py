"""Execution of held-key actions, validators and completion callbacks."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from keyboard_control.api.bindings import Binding, BuiltinAction, BuiltinActionFn, CallbackAction
from keyboard_control.api.key_events import KeyboardEvent
from keyboard_control.runtime.params import resolve_params

logger = logging.getLogger(__name__)


class ActionExecutor:
    """Invoke binding callbacks against one opaque controller handle."""

    def __init__(
        self,
        controller: Any,
        builtin_actions: Mapping[int, BuiltinActionFn],
        request_cancel: Callable[[str], None],
        *,
        trace: bool = False,
    ) -> None:
        self._controller = controller
        self._builtin_actions = builtin_actions
        self._request_cancel = request_cancel
        self._trace = trace

    def execute(self, binding: Binding, key: str, event: KeyboardEvent | None) -> None:
        """Run the held action of key once."""
        params = resolve_params(binding.params, self._controller, event)
        action = binding.action
        if isinstance(action, BuiltinAction):
            builtin = self._builtin_actions.get(action.action_id)
            if builtin is None:
                if self._trace:
                    logger.debug(
                        "keyboard_builtin_missing key=%s action_id=%d",
                        key,
                        action.action_id,
                        extra={"key": key, "action_id": action.action_id},
                    )
                return
            builtin(self._controller, params, event)
            return
        if isinstance(action, CallbackAction):
            result = action.handler(self._controller, params, event)
            if result is False:
                self._request_cancel(key)

    def validate(self, binding: Binding, event: KeyboardEvent) -> bool:
        """Return whether a press of binding is accepted."""
        if binding.validate is None:
            return True
        params = resolve_params(binding.params, self._controller, event)
        return binding.validate(self._controller, params, event)

    def complete(self, binding: Binding, event: KeyboardEvent) -> None:
        """Invoke the completion callback of a released press."""
        if binding.done is not None:
            binding.done(self._controller, event)
