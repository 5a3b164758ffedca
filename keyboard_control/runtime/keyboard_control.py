"""Keyboard-to-action dispatch engine."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from keyboard_control.api.bindings import BindingSet, BuiltinActionFn, parse_binding_set
from keyboard_control.api.key_events import KeyboardEvent
from keyboard_control.api.key_state import KeyState
from keyboard_control.api.signals import ContextRunner, SignalSource, Subscription
from keyboard_control.runtime.action_executor import ActionExecutor
from keyboard_control.runtime.binding_registry import BindingRegistry
from keyboard_control.runtime.config import KeyboardControlConfig, load_keyboard_control_config
from keyboard_control.runtime.key_mapping import KeyMapper, default_key_mapper
from keyboard_control.runtime.key_state import KeyStateTracker

logger = logging.getLogger(__name__)


class RuntimeKeyboardControl:
    """Map key presses onto declared actions and re-run held actions every tick.

    One instance owns one binding lifecycle at a time. ``install`` attaches to
    the key-down, key-up and tick sources on first use and replaces the
    binding set wholesale; ``remove`` detaches and discards all key state.
    Handlers run synchronously on the host's event thread.
    """

    def __init__(
        self,
        *,
        controller: Any,
        key_down: SignalSource,
        key_up: SignalSource,
        tick: SignalSource,
        builtin_actions: Mapping[int, BuiltinActionFn] | None = None,
        context_runner: ContextRunner | None = None,
        config: KeyboardControlConfig | None = None,
    ) -> None:
        self._config = config if config is not None else load_keyboard_control_config()
        self._trace = self._config.trace_enabled
        self._key_down_source = key_down
        self._key_up_source = key_up
        self._tick_source = tick
        self._context_runner = context_runner
        self._subscriptions: tuple[Subscription, ...] = ()
        self._registry: BindingRegistry | None = None
        self._tracker: KeyStateTracker | None = None
        self._key_mapper: KeyMapper = default_key_mapper
        self._executor = ActionExecutor(
            controller,
            builtin_actions if builtin_actions is not None else {},
            self._cancel,
            trace=self._trace,
        )

    @property
    def is_installed(self) -> bool:
        return self._registry is not None

    def install(
        self,
        bindings: BindingSet | None,
        key_mapper: KeyMapper | None = None,
        run_outside_main_context: bool = False,
    ) -> None:
        """Install a binding set, replacing any previous one and its key state."""
        if not bindings:
            self.remove()
            return
        parsed = parse_binding_set(bindings)
        if not self._subscriptions:
            self._attach(run_outside_main_context)
        self._registry = BindingRegistry(parsed)
        self._tracker = KeyStateTracker(self._registry.keys())
        self._key_mapper = key_mapper or default_key_mapper
        if self._trace:
            keys = ",".join(self._registry.keys())
            logger.debug("keyboard_controls_installed keys=%s", keys, extra={"keys": keys})

    def remove(self) -> None:
        """Detach from event sources and discard bindings. Idempotent."""
        self._detach()
        was_installed = self._registry is not None
        self._registry = None
        self._tracker = None
        self._key_mapper = default_key_mapper
        if self._trace and was_installed:
            logger.debug("keyboard_controls_removed")

    def state_of(self, key: str) -> KeyState | None:
        """Return activation state of a bound key, or None when unbound."""
        if self._tracker is None:
            return None
        run_state = self._tracker.state_of(key)
        return None if run_state is None else run_state.state

    def installed_keys(self) -> tuple[str, ...]:
        if self._registry is None:
            return ()
        return self._registry.keys()

    def _on_key_down(self, event: KeyboardEvent) -> None:
        registry = self._registry
        tracker = self._tracker
        if registry is None or tracker is None:
            return
        key = self._key_mapper(event)
        binding = registry.lookup(key)
        if binding is None:
            return
        state = tracker.on_key_down(
            key,
            binding,
            event,
            lambda: self._executor.validate(binding, event),
        )
        if self._trace:
            state_name = state.value if state else None
            logger.debug(
                "keyboard_key_down key=%s state=%s",
                key,
                state_name,
                extra={"key": key, "state": state_name},
            )

    def _on_key_up(self, event: KeyboardEvent) -> None:
        registry = self._registry
        tracker = self._tracker
        if registry is None or tracker is None:
            return
        key = self._key_mapper(event)
        if registry.lookup(key) is None:
            return
        previous = tracker.on_key_up(key)
        if self._trace:
            previous_name = previous.state.value if previous else None
            logger.debug(
                "keyboard_key_up key=%s previous=%s",
                key,
                previous_name,
                extra={"key": key, "previous": previous_name},
            )
        if previous is not None and previous.state is KeyState.PRESSED and previous.binding:
            self._executor.complete(previous.binding, event)

    def _on_tick(self) -> None:
        tracker = self._tracker
        if tracker is None:
            return
        first_error: Exception | None = None
        for key, run_state in tracker.pressed():
            # Callbacks may reinstall or remove bindings mid-tick.
            if self._tracker is not tracker:
                break
            current = tracker.state_of(key)
            if current is None or current.state is not KeyState.PRESSED or current.binding is None:
                continue
            try:
                self._executor.execute(current.binding, key, current.event)
            except Exception as exc:
                if first_error is None:
                    first_error = exc
                else:
                    logger.error(
                        "keyboard_action_failed key=%s", key, exc_info=True, extra={"key": key}
                    )
        if first_error is not None:
            raise first_error

    def _cancel(self, key: str) -> None:
        tracker = self._tracker
        if tracker is None:
            return
        if tracker.cancel(key) and self._trace:
            logger.debug(
                "keyboard_key_cancelled key=%s", key, extra={"key": key, "state": "ignored"}
            )

    def _attach(self, run_outside_main_context: bool) -> None:
        def register() -> None:
            self._subscriptions = (
                self._key_down_source.subscribe(self._on_key_down),
                self._key_up_source.subscribe(self._on_key_up),
                self._tick_source.subscribe(self._on_tick),
            )

        if run_outside_main_context and self._context_runner is not None:
            self._context_runner(register)
        else:
            register()

    def _detach(self) -> None:
        if not self._subscriptions:
            return
        key_down, key_up, tick = self._subscriptions
        self._subscriptions = ()
        self._key_down_source.unsubscribe(key_down)
        self._key_up_source.unsubscribe(key_up)
        self._tick_source.unsubscribe(tick)


KeyboardControl = RuntimeKeyboardControl
