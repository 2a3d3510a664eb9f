# modelstate/core/validations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import TYPE_CHECKING, List, Mapping, Optional

from modelstate.core.errors import DefinitionError
from modelstate.core.events import Event
from modelstate.core.states import State
from modelstate.core.transitions import Transition
from modelstate.interfaces.types import InitialStateRule

if TYPE_CHECKING:
    from modelstate.core.definition import StateMachineDefinition


class Validator:
    """
    Performs declaration-time validation of machine definitions, ensuring
    states, events and transitions are well-formed before any object of the
    type uses them.
    """

    def __init__(self) -> None:
        self._rules_engine = _ValidationRulesEngine()

    def validate_definition(self, definition: "StateMachineDefinition") -> None:
        """
        Check the definition's states and events for consistency.

        :raises DefinitionError: If validation fails.
        """
        self._rules_engine.validate_definition(definition)

    def validate_transition(self, transition: Transition, states: Mapping[str, State]) -> None:
        """
        Check that a transition only names declared states and that its guard
        and callbacks are usable.

        :raises DefinitionError: If validation fails.
        """
        self._rules_engine.validate_transition(transition, states)

    def validate_event(self, event: Event) -> None:
        """
        :raises DefinitionError: If the event has no name.
        """
        self._rules_engine.validate_event(event)


class _ValidationRulesEngine:
    """
    Internal engine applying the validation rules to a definition.
    """

    def __init__(self) -> None:
        self._default_rules = _DefaultValidationRules

    def validate_definition(self, definition: "StateMachineDefinition") -> None:
        self._default_rules.validate_column(definition.column)
        self._default_rules.validate_states(definition.states, definition.explicit_initial_state)
        for event in definition.events.values():
            self.validate_event(event)
            for t in event.transitions:
                self.validate_transition(t, definition.states)

    def validate_transition(self, transition: Transition, states: Mapping[str, State]) -> None:
        self._default_rules.validate_transition(transition, states)

    def validate_event(self, event: Event) -> None:
        self._default_rules.validate_event(event)


class _DefaultValidationRules:
    """
    Built-in rules ensuring basic correctness of a definition.
    """

    @staticmethod
    def validate_column(column: str) -> None:
        if not column or not isinstance(column, str):
            raise DefinitionError("Machine column must be a non-empty string.")

    @staticmethod
    def validate_states(states: Mapping[str, State], explicit_initial: Optional[InitialStateRule]) -> None:
        """
        State names must be non-empty; without an explicit initial-state rule
        at most one state may be flagged initial. A literal rule must name a
        declared state; a function rule is checked when it is evaluated.
        """
        flagged: List[str] = []
        for s in states.values():
            if not s.name or not isinstance(s.name, str):
                raise DefinitionError("State must have a non-empty string name.")
            if s.initial:
                flagged.append(s.name)
        if len(flagged) > 1 and explicit_initial is None:
            raise DefinitionError(f"States {flagged} are all marked initial; only one initial state is allowed.")
        if isinstance(explicit_initial, str) and explicit_initial not in states:
            raise DefinitionError(f"Initial state '{explicit_initial}' is not a declared state.")

    @staticmethod
    def validate_transition(transition: Transition, states: Mapping[str, State]) -> None:
        if transition.to not in states:
            raise DefinitionError(f"Transition targets undeclared state '{transition.to}'.")
        for source in sorted(transition.sources or ()):
            if source not in states:
                raise DefinitionError(f"Transition starts from undeclared state '{source}'.")
        for label, cb in (("guard", transition.guard), ("before", transition.before), ("after", transition.after)):
            if cb is not None and not (callable(cb) or isinstance(cb, str)):
                raise DefinitionError(f"Transition {label} must be callable or a method name.")

    @staticmethod
    def validate_event(event: Event) -> None:
        if not event.name:
            raise DefinitionError("Event must have a name.")
