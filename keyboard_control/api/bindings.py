"""Public binding contracts and binding-set parsing."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias

from keyboard_control.api.errors import BindingDefinitionError
from keyboard_control.api.key_events import KeyboardEvent

Params: TypeAlias = Mapping[str, Any]


class Validator(Protocol):
    """Gate deciding whether a key press is accepted."""

    def __call__(self, controller: Any, params: Params, event: KeyboardEvent) -> bool: ...


class ActionHandler(Protocol):
    """User action invoked once per tick while its key is held.

    Returning ``False`` cancels the press until the key is released.
    """

    def __call__(self, controller: Any, params: Params, event: KeyboardEvent) -> bool | None: ...


class ParamsProvider(Protocol):
    """Lazily computed action parameters."""

    def __call__(self, controller: Any, event: KeyboardEvent) -> Params: ...


class CompletionHandler(Protocol):
    """Callback invoked once when an accepted press is released."""

    def __call__(self, controller: Any, event: KeyboardEvent) -> None: ...


class BuiltinActionFn(Protocol):
    """Entry of the externally owned built-in action table."""

    def __call__(self, controller: Any, params: Params, event: KeyboardEvent) -> None: ...


@dataclass(frozen=True, slots=True)
class BuiltinAction:
    """Action reachable by numeric id through the built-in table."""

    action_id: int


@dataclass(frozen=True, slots=True)
class CallbackAction:
    """Action implemented by a user callback."""

    handler: ActionHandler


Action: TypeAlias = BuiltinAction | CallbackAction
ParamsDefinition: TypeAlias = Params | ParamsProvider | None


@dataclass(frozen=True, slots=True)
class Binding:
    """Declared behavior of one canonical key."""

    action: Action
    validate: Validator | None = None
    params: ParamsDefinition = None
    done: CompletionHandler | None = None


BindingDefinition: TypeAlias = Binding | Mapping[str, Any]
BindingSet: TypeAlias = Mapping[str, BindingDefinition]


def resolve_action(raw: object) -> Action:
    """Resolve an action declaration into its tagged variant."""
    if isinstance(raw, (BuiltinAction, CallbackAction)):
        return raw
    # bool is an int subclass but never a valid action id.
    if isinstance(raw, int) and not isinstance(raw, bool):
        return BuiltinAction(int(raw))
    if callable(raw):
        return CallbackAction(raw)
    raise BindingDefinitionError(f"action must be a numeric id or a callable, got {raw!r}")


def parse_binding(definition: BindingDefinition) -> Binding:
    """Build a binding from a mapping definition; unrecognized fields are ignored."""
    if isinstance(definition, Binding):
        return definition
    if not isinstance(definition, Mapping):
        raise BindingDefinitionError(f"binding definition must be a mapping, got {definition!r}")
    if "action" not in definition:
        raise BindingDefinitionError("binding definition requires an 'action'")
    validate = definition.get("validate", definition.get("validation"))
    done = definition.get("done")
    if validate is not None and not callable(validate):
        raise BindingDefinitionError("'validate' must be callable")
    if done is not None and not callable(done):
        raise BindingDefinitionError("'done' must be callable")
    return Binding(
        action=resolve_action(definition["action"]),
        validate=validate,
        params=definition.get("params"),
        done=done,
    )


def parse_binding_set(bindings: BindingSet) -> dict[str, Binding]:
    """Parse every definition of a binding set, preserving declared key order."""
    parsed: dict[str, Binding] = {}
    for key, definition in bindings.items():
        if not isinstance(key, str):
            raise BindingDefinitionError(f"binding keys must be strings, got {key!r}")
        try:
            parsed[key] = parse_binding(definition)
        except BindingDefinitionError as exc:
            raise BindingDefinitionError(f"invalid binding for key {key!r}: {exc}") from exc
    return parsed


__all__ = [
    "Action",
    "ActionHandler",
    "Binding",
    "BindingDefinition",
    "BindingSet",
    "BuiltinAction",
    "BuiltinActionFn",
    "CallbackAction",
    "CompletionHandler",
    "Params",
    "ParamsDefinition",
    "ParamsProvider",
    "Validator",
    "parse_binding",
    "parse_binding_set",
    "resolve_action",
]
