from typing import List

import pytest

from mdvim.keymaps import RESTING, ActionRef, Binding, KeymapRegistry, KeyStroke
from mdvim.modes import STATE_KEY, InterpreterMode, KeyInput, Outcome
from mdvim.modes.dispatcher import KeystrokeDispatcher


def bind(dispatcher: KeystrokeDispatcher, token: str, handler) -> None:
    action_id = f"test.{token}"
    dispatcher.keymap_registry.register_action(ActionRef(action_id, handler))
    dispatcher.keymap_registry.register_binding(
        Binding(
            id=f"resting.{token}",
            mode=RESTING,
            stroke=KeyStroke.parse(token),
            action_id=action_id,
        )
    )


def test_dispatcher_registers_state_on_context(make_harness) -> None:
    harness = make_harness()

    assert harness.context.extras[STATE_KEY] is harness.dispatcher.state
    assert harness.dispatcher.mode is InterpreterMode.RESTING


def test_unbound_key_is_not_consumed_while_resting(make_harness) -> None:
    harness = make_harness("abc")
    key = KeyInput("a")

    assert harness.dispatcher.dispatch(key) is False

    assert key.accepted is False
    assert harness.buffer.text == "abc"


def test_consumed_key_is_marked_accepted(make_harness) -> None:
    harness = make_harness("abc")
    key = KeyInput("d", ("ctrl",))

    assert harness.dispatcher.dispatch(key) is True

    assert key.accepted is True


def test_shortcuts_are_not_evaluated_while_modal(make_harness) -> None:
    harness = make_harness("abc")
    harness.press("ctrl+d")

    harness.press("ctrl+b")

    assert harness.buffer.text == "abc"
    assert harness.mode is InterpreterMode.RESTING


def test_custom_binding_outcome_controls_consumption(make_harness) -> None:
    harness = make_harness()
    calls: List[str] = []

    def passthrough(context, match) -> Outcome:
        calls.append(match.binding.id)
        return Outcome.UNHANDLED

    bind(harness.dispatcher, "F5", passthrough)

    assert harness.press("F5") == [False]
    assert calls == ["resting.F5"]


def test_dispatch_is_not_reentrant(make_harness) -> None:
    harness = make_harness()
    timeouts: List[bool] = []

    def reenter(context, match) -> Outcome:
        timeouts.append(context.extras["dispatcher"].force_timeout())
        context.extras["dispatcher"].dispatch(KeyInput("x"))
        return Outcome.HANDLED

    bind(harness.dispatcher, "F6", reenter)

    with pytest.raises(RuntimeError):
        harness.press("F6")

    assert timeouts == [False]
    assert harness.press("ctrl+d") == [True]


def test_explicit_registry_skips_defaults(make_harness) -> None:
    harness = make_harness()
    registry = KeymapRegistry()

    dispatcher = KeystrokeDispatcher(harness.context, keymap_registry=registry)

    assert dispatcher.keymap_registry is registry
    assert registry.stats().binding_count == 0
    assert dispatcher.dispatch(KeyInput("d", ("ctrl",))) is False


def test_timer_polling_is_a_no_op_while_resting(make_harness) -> None:
    harness = make_harness()
    harness.clock.advance(5000)

    assert harness.dispatcher.process_timeouts() is False
    assert harness.mode_changes == []
