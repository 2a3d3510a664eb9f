# tests/unit/core/test_transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from modelstate.core.errors import CallbackError
from modelstate.core.events import Event
from modelstate.core.transitions import Transition, transition


def test_transition_init(dummy_guard, dummy_action):
    t = Transition("running", from_="sleeping", guard=dummy_guard, before=dummy_action, after=dummy_action)
    assert t.to == "running"
    assert t.sources == frozenset(["sleeping"])
    assert t.guard is dummy_guard
    assert t.before is dummy_action
    assert t.after is dummy_action


def test_transition_helper_accepts_iterable_sources():
    t = transition(to="closed", from_=["open", "ajar"])
    assert t.sources == frozenset(["open", "ajar"])
    assert t.allows_from("ajar")
    assert not t.allows_from("closed")


def test_transition_without_sources_allows_any_state():
    t = transition(to="reset")
    assert t.sources is None
    assert t.allows_from("anything")
    assert t.allows_from(None)


def test_transition_evaluate_guard_passes_host_and_args(host):
    guard = MagicMock(return_value=True)
    t = transition(to="b", from_="a", guard=guard)
    assert t.evaluate_guard(host, 1) is True
    guard.assert_called_once_with(host, 1)


def test_transition_guard_by_method_name():
    class Host:
        def ready(self, flag=True):
            return flag

    t = transition(to="b", guard="ready")
    assert t.evaluate_guard(Host()) is True
    assert t.evaluate_guard(Host(), False) is False


def test_guard_not_consulted_when_source_mismatches(host):
    guard = MagicMock(return_value=True)
    t = transition(to="b", from_="a", guard=guard)
    assert not t.matches(host, "c")
    guard.assert_not_called()


def test_guard_failure_is_wrapped(host):
    def bad_guard(h):
        raise ValueError("broken")

    t = transition(to="b", guard=bad_guard)
    with pytest.raises(CallbackError, match="broken") as info:
        t.evaluate_guard(host)
    assert isinstance(info.value.__cause__, ValueError)


def test_execute_callbacks(host):
    calls = []
    t = transition(
        to="b",
        before=lambda h, *a: calls.append(("before", a)),
        after=lambda h, *a: calls.append(("after", a)),
    )
    t.execute_before(host, 1)
    t.execute_after(host, 2)
    assert calls == [("before", (1,)), ("after", (2,))]


def test_event_selects_first_matching_transition_in_order(host):
    first = transition(to="x", from_="a")
    second = transition(to="y", from_="a")
    e = Event("go", [first, second])
    assert e.select(host, "a") is first


def test_event_skips_transitions_with_failing_guard(host):
    blocked = transition(to="x", from_="a", guard=lambda h: False)
    allowed = transition(to="y", from_="a")
    e = Event("go", [blocked, allowed])
    assert e.select(host, "a") is allowed


def test_event_select_returns_none_without_match(host):
    e = Event("go", [transition(to="x", from_="a")])
    assert e.select(host, "b") is None


def test_event_extended_appends_transitions():
    t1 = transition(to="x", from_="a")
    t2 = transition(to="y", from_="b")
    e = Event("go", [t1])
    extended = e.extended([t2])
    assert extended.transitions == (t1, t2)
    assert e.transitions == (t1,)
    assert extended.name == "go"
