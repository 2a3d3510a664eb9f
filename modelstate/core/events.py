# modelstate/core/events.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, Iterable, Optional, Tuple

from modelstate.core.transitions import Transition


class Event:
    """
    Represents a named trigger. Firing an event moves the machine along the
    first of its transitions that accepts the current state.
    """

    def __init__(self, name: str, transitions: Iterable[Transition] = ()) -> None:
        """
        :param name: A string identifying this event.
        :param transitions: Candidate transitions, in matching order.
        """
        self._name = name
        self._transitions: Tuple[Transition, ...] = tuple(transitions)

    @property
    def name(self) -> str:
        """The name of the event."""
        return self._name

    @property
    def transitions(self) -> Tuple[Transition, ...]:
        """The event's transitions in declaration order."""
        return self._transitions

    def select(self, host: Any, state: Optional[str], *args: Any) -> Optional[Transition]:
        """
        Return the first transition that accepts ``state`` and whose guard
        passes, or None.
        """
        for t in self._transitions:
            if t.matches(host, state, *args):
                return t
        return None

    def extended(self, transitions: Iterable[Transition]) -> "Event":
        """Return a new event with ``transitions`` appended after the existing ones."""
        return Event(self._name, self._transitions + tuple(transitions))

    def __repr__(self) -> str:
        return f"Event({self._name!r}, transitions={list(self._transitions)!r})"
