# modelstate/core/definition.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional

from modelstate.config import DEFAULT_CONFIG, MachineConfig
from modelstate.core.actions import ActionSpec
from modelstate.core.errors import CallbackError, UndefinedEventError, UndefinedStateError
from modelstate.core.events import Event
from modelstate.core.states import State
from modelstate.core.transitions import Transition
from modelstate.core.validations import Validator
from modelstate.interfaces.types import InitialStateRule


class StateMachineDefinition:
    """
    The immutable model of a machine: states, events, the initial-state rule
    and the name of the backing field. Built once per declaring type and
    shared by every object of that type.

    Use DefinitionBuilder to construct one; a built definition never changes.
    """

    __slots__ = ("_states", "_events", "_initial_state", "_config")

    def __init__(
        self,
        states: Mapping[str, State],
        events: Mapping[str, Event],
        initial_state: Optional[InitialStateRule] = None,
        config: MachineConfig = DEFAULT_CONFIG,
    ) -> None:
        """
        :param states: State name to State, in declaration order.
        :param events: Event name to Event, in declaration order.
        :param initial_state: Explicit initial-state rule: a state name or a
            function of the object returning one. None falls back to the state
            flagged initial, then to the first declared state.
        :param config: The machine configuration, including the backing column.
        """
        self._states = MappingProxyType(dict(states))
        self._events = MappingProxyType(dict(events))
        self._initial_state = initial_state
        self._config = config

    @property
    def states(self) -> Mapping[str, State]:
        """Read-only mapping of declared states."""
        return self._states

    @property
    def events(self) -> Mapping[str, Event]:
        """Read-only mapping of declared events."""
        return self._events

    @property
    def column(self) -> str:
        """Name of the backing field holding the current state."""
        return self._config.column

    @property
    def config(self) -> MachineConfig:
        return self._config

    @property
    def initial_state(self) -> Optional[InitialStateRule]:
        """
        The effective initial-state rule, without evaluating it.
        """
        if self._initial_state is not None:
            return self._initial_state
        for s in self._states.values():
            if s.initial:
                return s.name
        for name in self._states:
            return name
        return None

    @property
    def explicit_initial_state(self) -> Optional[InitialStateRule]:
        return self._initial_state

    @property
    def has_explicit_initial_state(self) -> bool:
        return self._initial_state is not None

    def state_names(self) -> List[str]:
        return list(self._states)

    def event_names(self) -> List[str]:
        return list(self._events)

    def state(self, name: str) -> State:
        """
        :raises UndefinedStateError: If no state has that name.
        """
        try:
            return self._states[name]
        except KeyError:
            raise UndefinedStateError(f"State '{name}' is not defined") from None

    def event(self, name: str) -> Event:
        """
        :raises UndefinedEventError: If no event has that name.
        """
        try:
            return self._events[name]
        except KeyError:
            raise UndefinedEventError(f"Event '{name}' is not defined") from None

    def initial_state_for(self, host: Any) -> Optional[str]:
        """
        Evaluate the initial-state rule for ``host``: call it if it is a
        function, otherwise return the literal.

        :raises CallbackError: If the rule function raises.
        :raises UndefinedStateError: If the rule yields an undeclared state.
        """
        rule = self.initial_state
        if rule is None:
            return None
        if callable(rule):
            try:
                name = rule(host)
            except Exception as e:
                raise CallbackError(f"Initial state rule failed: {e}", callback=rule) from e
        else:
            name = rule
        if name is not None:
            name = str(name)
            if name not in self._states:
                raise UndefinedStateError(f"Initial state '{name}' is not defined")
        return name

    def __repr__(self) -> str:
        return (
            f"StateMachineDefinition(column={self.column!r}, states={self.state_names()!r}, "
            f"events={self.event_names()!r})"
        )


class DefinitionBuilder:
    """
    Accumulates declarations and produces a validated, immutable
    StateMachineDefinition. A builder may be seeded from an ancestor's
    definition so a derived type extends it rather than starting over.
    """

    def __init__(
        self,
        base: Optional[StateMachineDefinition] = None,
        validator: Optional[Validator] = None,
    ) -> None:
        """
        :param base: Definition whose declarations are copied as a starting point.
        :param validator: Validator applied by build().
        """
        self._validator = validator or Validator()
        self._states: Dict[str, State] = dict(base.states) if base else {}
        self._events: Dict[str, Event] = dict(base.events) if base else {}
        self._initial_state: Optional[InitialStateRule] = base.explicit_initial_state if base else None
        self._config: MachineConfig = base.config if base else DEFAULT_CONFIG

    @property
    def config(self) -> MachineConfig:
        return self._config

    def declare_state(
        self,
        name: str,
        initial: bool = False,
        on_enter: Optional[ActionSpec] = None,
        on_exit: Optional[ActionSpec] = None,
    ) -> "DefinitionBuilder":
        """
        Declare a state. Declaring an existing name replaces it in place.
        """
        self._states[name] = State(name, initial=initial, on_enter=on_enter, on_exit=on_exit)
        return self

    def declare_event(self, name: str, transitions: Iterable[Transition]) -> "DefinitionBuilder":
        """
        Declare an event. Declaring an existing name appends the new
        transitions after the ones already declared.
        """
        existing = self._events.get(name)
        if existing is None:
            self._events[name] = Event(name, transitions)
        else:
            self._events[name] = existing.extended(transitions)
        return self

    def set_column(self, column: str) -> "DefinitionBuilder":
        self._config = self._config.replace(column=column)
        return self

    def set_initial_state(self, rule: Optional[InitialStateRule]) -> "DefinitionBuilder":
        self._initial_state = rule
        return self

    def set_config(self, config: MachineConfig) -> "DefinitionBuilder":
        self._config = config
        return self

    def build(self) -> StateMachineDefinition:
        """
        :raises DefinitionError: If the declarations are inconsistent.
        """
        definition = StateMachineDefinition(
            states=self._states,
            events=self._events,
            initial_state=self._initial_state,
            config=self._config,
        )
        self._validator.validate_definition(definition)
        return definition
