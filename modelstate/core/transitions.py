# modelstate/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, FrozenSet, Iterable, Optional, Union

from modelstate.core.actions import ActionSpec, run_callbacks
from modelstate.core.guards import _GuardAdapter


class Transition:
    """
    Defines a possible path into a target state, restricted to a set of source
    states and optionally gated by a guard. Belongs to exactly one event; the
    event tries its transitions in the order they were declared.
    """

    def __init__(
        self,
        to: str,
        from_: Optional[Union[str, Iterable[str]]] = None,
        guard: Optional[ActionSpec] = None,
        before: Optional[ActionSpec] = None,
        after: Optional[ActionSpec] = None,
    ) -> None:
        """
        :param to: Identifier of the target state.
        :param from_: A source state identifier, an iterable of them, or None
            to allow the transition from any state.
        :param guard: Predicate called as ``guard(host, *args)``, or a host method name.
        :param before: Callback run once the transition is selected, before the state is written.
        :param after: Callback run after the state was written successfully.
        """
        self._to = to
        if from_ is None:
            self._sources: Optional[FrozenSet[str]] = None
        elif isinstance(from_, str):
            self._sources = frozenset([from_])
        else:
            self._sources = frozenset(from_)
        self._guard = guard
        self._before = before
        self._after = after

    @property
    def to(self) -> str:
        """The target state identifier."""
        return self._to

    @property
    def sources(self) -> Optional[FrozenSet[str]]:
        """The allowed source states; None means any state."""
        return self._sources

    @property
    def guard(self) -> Optional[ActionSpec]:
        return self._guard

    @property
    def before(self) -> Optional[ActionSpec]:
        return self._before

    @property
    def after(self) -> Optional[ActionSpec]:
        return self._after

    def allows_from(self, state: Optional[str]) -> bool:
        """
        Check whether ``state`` is an accepted source state.
        """
        return self._sources is None or state in self._sources

    def evaluate_guard(self, host: Any, *args: Any) -> bool:
        """
        Evaluate the attached guard to determine if the transition can occur.

        :return: True if there is no guard or it passes.
        """
        return _GuardAdapter(self._guard).check(host, *args)

    def matches(self, host: Any, state: Optional[str], *args: Any) -> bool:
        """
        True if the transition can fire from ``state``. The guard is only
        consulted when the source state matches.
        """
        return self.allows_from(state) and self.evaluate_guard(host, *args)

    def execute_before(self, host: Any, *args: Any) -> None:
        if self._before is not None:
            run_callbacks([self._before], host, *args)

    def execute_after(self, host: Any, *args: Any) -> None:
        if self._after is not None:
            run_callbacks([self._after], host, *args)

    def __repr__(self) -> str:
        sources = "*" if self._sources is None else sorted(self._sources)
        return f"Transition(from={sources}, to={self._to!r})"


def transition(
    to: str,
    from_: Optional[Union[str, Iterable[str]]] = None,
    guard: Optional[ActionSpec] = None,
    before: Optional[ActionSpec] = None,
    after: Optional[ActionSpec] = None,
) -> Transition:
    """Declaration helper: ``transition(to="running", from_="sleeping")``."""
    return Transition(to, from_=from_, guard=guard, before=before, after=after)
