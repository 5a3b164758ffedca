from __future__ import annotations

import pytest

from keyboard_control.api.key_events import KeyboardEvent
from keyboard_control.api.key_state import KeyState
from tests.keyboard_control.conftest import Harness, make_harness


def test_held_builtin_runs_once_per_tick_without_done() -> None:
    fwd_calls: list[dict] = []
    fwd = make_harness({42: lambda controller, params, event: fwd_calls.append(params)})
    fwd.control.install({"W": {"action": 42}})

    fwd.press("W")
    fwd.frame(2)
    fwd.release("W")
    fwd.frame()

    assert len(fwd_calls) == 2
    assert fwd.control.state_of("W") is KeyState.RELEASED


def test_rejected_press_never_runs_action(harness: Harness) -> None:
    calls: list[str] = []
    harness.control.install(
        {"A": {"action": lambda c, p, e: calls.append("a"), "validate": lambda c, p, e: False}}
    )

    harness.press("A")
    harness.frame()

    assert calls == []
    assert harness.control.state_of("A") is KeyState.RELEASED


def test_cancelled_action_is_ignored_until_release_and_skips_done(harness: Harness) -> None:
    calls: list[str] = []
    done: list[str] = []

    def action(controller, params, event):
        calls.append(event.key)
        return False

    harness.control.install({"S": {"action": action, "done": lambda c, e: done.append(e.key)}})

    harness.press("S")
    harness.frame()
    assert calls == ["S"]
    assert harness.control.state_of("S") is KeyState.IGNORED

    harness.frame()
    harness.press("S")
    harness.frame()
    assert calls == ["S"]

    harness.release("S")
    assert done == []
    assert harness.control.state_of("S") is KeyState.RELEASED

    harness.press("S")
    harness.frame()
    assert calls == ["S", "S"]


def test_release_of_accepted_press_calls_done_once(harness: Harness) -> None:
    done: list[tuple] = []
    harness.control.install({"D": {"action": lambda c, p, e: None, "done": lambda c, e: done.append((c, e))}})

    harness.press("D")
    harness.release("D")
    harness.release("D")

    assert len(done) == 1
    controller, event = done[0]
    assert controller is harness.controller
    assert event.event_type == "key_up"


def test_unbound_keys_leave_no_state_and_have_no_effect(harness: Harness) -> None:
    calls: list[str] = []
    harness.control.install({"W": {"action": lambda c, p, e: calls.append("w")}})

    harness.press("Q")
    harness.frame()
    harness.release("Q")

    assert harness.control.state_of("Q") is None
    assert harness.control.installed_keys() == ("W",)
    assert calls == []


def test_actions_receive_controller_fresh_params_and_originating_event(harness: Harness) -> None:
    counter = {"n": 0}
    seen: list[tuple] = []

    def params(controller, event):
        counter["n"] += 1
        return {"n": counter["n"]}

    harness.control.install(
        {"W": {"action": lambda c, p, e: seen.append((c, p["n"], e.event_type)), "params": params}}
    )
    harness.press("W")
    harness.frame(2)

    assert seen == [(harness.controller, 1, "key_down"), (harness.controller, 2, "key_down")]


def test_reinstall_resets_pressed_keys(harness: Harness) -> None:
    done: list[str] = []
    calls: list[str] = []
    harness.control.install({"W": {"action": lambda c, p, e: calls.append("old"), "done": lambda c, e: done.append("w")}})
    harness.press("W")

    harness.control.install({"W": {"action": lambda c, p, e: calls.append("new")}, "S": {"action": 1}})
    assert harness.control.state_of("W") is KeyState.RELEASED
    harness.frame()
    harness.release("W")

    assert calls == []
    assert done == []


def test_reinstall_without_key_makes_release_noop(harness: Harness) -> None:
    done: list[str] = []
    harness.control.install({"W": {"action": 1, "done": lambda c, e: done.append("w")}})
    harness.press("W")
    harness.control.install({"S": {"action": 1}})

    harness.release("W")

    assert done == []
    assert harness.control.state_of("W") is None


def test_custom_key_mapper_replaces_default(harness: Harness) -> None:
    calls: list[str] = []
    harness.control.install(
        {"w": {"action": lambda c, p, e: calls.append(e.key)}},
        key_mapper=lambda event: event.key.lower(),
    )
    harness.press("W")
    harness.frame()
    assert calls == ["W"]

    harness.control.install({"w": {"action": 1}})
    harness.press("W")
    assert harness.control.state_of("w") is KeyState.RELEASED


def test_failing_key_does_not_block_other_keys_on_same_tick(harness: Harness) -> None:
    calls: list[str] = []

    def broken(controller, params, event):
        calls.append("A")
        raise RuntimeError("boom")

    harness.control.install(
        {"A": {"action": broken}, "B": {"action": lambda c, p, e: calls.append("B")}}
    )
    harness.press("A")
    harness.press("B")

    with pytest.raises(RuntimeError, match="boom"):
        harness.frame()
    assert calls == ["A", "B"]
    assert harness.control.state_of("A") is KeyState.PRESSED
    assert harness.control.state_of("B") is KeyState.PRESSED

    with pytest.raises(RuntimeError):
        harness.frame()
    assert calls == ["A", "B", "A", "B"]


def test_first_tick_error_is_raised_and_later_ones_logged(harness: Harness, caplog) -> None:
    def fail(message):
        def action(controller, params, event):
            raise ValueError(message)

        return action

    harness.control.install({"A": {"action": fail("first")}, "B": {"action": fail("second")}})
    harness.press("A")
    harness.press("B")

    with caplog.at_level("ERROR"):
        with pytest.raises(ValueError, match="first"):
            harness.frame()
    assert any("keyboard_action_failed key=B" in record.getMessage() for record in caplog.records)


def test_validator_exception_propagates_and_leaves_key_released(harness: Harness) -> None:
    def validate(controller, params, event):
        raise KeyError("invalid")

    harness.control.install({"V": {"action": 1, "validate": validate}})
    with pytest.raises(KeyError):
        harness.press("V")
    assert harness.control.state_of("V") is KeyState.RELEASED


def test_done_exception_propagates_after_release(harness: Harness) -> None:
    def done(controller, event):
        raise RuntimeError("done failed")

    harness.control.install({"D": {"action": 1, "done": done}})
    harness.press("D")
    with pytest.raises(RuntimeError):
        harness.release("D")
    assert harness.control.state_of("D") is KeyState.RELEASED


def test_action_removing_controls_mid_tick_stops_iteration(harness: Harness) -> None:
    calls: list[str] = []

    def remove_all(controller, params, event):
        calls.append("A")
        harness.control.remove()

    harness.control.install({"A": {"action": remove_all}, "B": {"action": lambda c, p, e: calls.append("B")}})
    harness.press("A")
    harness.press("B")
    harness.frame()

    assert calls == ["A"]
    assert harness.control.is_installed is False


def test_key_down_while_pressed_refreshes_originating_event(harness: Harness) -> None:
    seen: list[tuple[str, ...]] = []
    harness.control.install({"W": {"action": lambda c, p, e: seen.append(e.modifiers)}})

    harness.press("W")
    harness.frame()
    harness.key_down.emit(KeyboardEvent("key_down", ord("W"), "W", ("Shift",)))
    harness.frame()

    assert seen == [(), ("Shift",)]


def test_trace_logging_records_transitions(caplog) -> None:
    traced = make_harness(trace_enabled=True)
    traced.control.install({"W": {"action": lambda c, p, e: False}})

    with caplog.at_level("DEBUG", logger="keyboard_control"):
        traced.press("W")
        traced.frame()
        traced.release("W")
        traced.control.remove()

    messages = [record.getMessage() for record in caplog.records]
    assert "keyboard_key_down key=W state=pressed" in messages
    assert "keyboard_key_cancelled key=W" in messages
    assert "keyboard_key_up key=W previous=ignored" in messages
    assert "keyboard_controls_removed" in messages
