# modelstate/stateful.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Declarative machine definitions on ordinary classes.

Example::

    class Validator(StatefulRecord, column="status"):
        __fields__ = ("name", "status")
        validates_presence_of = ("name",)

        sleeping = state(initial=True)
        running = state()

        run = event(transition(to="running", from_="sleeping"))
        sleep = event(transition(to="sleeping", from_="running"))

    v = Validator.create(name="name")
    v.is_sleeping()        # True
    v.run_and_save()       # True, stored durably
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Iterable, List, Mapping, Optional, Tuple

from modelstate.config import MachineConfig
from modelstate.core.actions import ActionSpec
from modelstate.core.definition import DefinitionBuilder, StateMachineDefinition
from modelstate.core.errors import DefinitionError
from modelstate.core.events import Event
from modelstate.core.hooks import HookManager, HostCallbacks
from modelstate.core.machine import MachineInstance
from modelstate.core.states import State
from modelstate.core.transitions import Transition
from modelstate.interfaces.types import InitialStateRule
from modelstate.persistence.record import InitialStateEnsurer
from modelstate.persistence.scopes import ScopeRegistrar
from modelstate.runtime.registry import registry

logger = logging.getLogger(__name__)


class StateDeclaration:
    """Placeholder left in a class body by :func:`state`."""

    def __init__(
        self,
        initial: bool = False,
        on_enter: Optional[ActionSpec] = None,
        on_exit: Optional[ActionSpec] = None,
        name: Optional[str] = None,
    ) -> None:
        self.initial = initial
        self.on_enter = on_enter
        self.on_exit = on_exit
        self.name = name


class EventDeclaration:
    """Placeholder left in a class body by :func:`event`."""

    def __init__(self, transitions: Iterable[Transition], name: Optional[str] = None) -> None:
        self.transitions = tuple(transitions)
        self.name = name


def state(
    initial: bool = False,
    on_enter: Optional[ActionSpec] = None,
    on_exit: Optional[ActionSpec] = None,
    name: Optional[str] = None,
) -> StateDeclaration:
    """Declare a state; its name defaults to the attribute it is assigned to."""
    return StateDeclaration(initial=initial, on_enter=on_enter, on_exit=on_exit, name=name)


def event(*transitions: Transition, name: Optional[str] = None) -> EventDeclaration:
    """Declare an event with its transitions in matching order."""
    return EventDeclaration(transitions, name=name)


class _MachineAccessor:
    """
    Descriptor giving each object its own MachineInstance, created on first
    access and cached on the object. A cached instance follows later
    declarations on the type.
    """

    _slot = "_fsm_machine"

    def __get__(self, obj: Any, owner: type) -> Any:
        if obj is None:
            return self
        definition = owner.fsm_definition()
        machine = obj.__dict__.get(self._slot)
        if machine is None:
            hooks = HookManager([HostCallbacks(), *owner.fsm_hooks])
            machine = MachineInstance(definition, obj, hooks=hooks)
            obj.__dict__[self._slot] = machine
        elif machine.definition is not definition:
            machine.rebind(definition)
        return machine


def _make_predicate(state_name: str):
    def predicate(self) -> bool:
        return self.fsm.is_state(state_name)

    predicate.__name__ = f"is_{state_name}"
    predicate.__doc__ = f"True if the object is in state '{state_name}'."
    return predicate


def _make_fire(event_name: str):
    def fire(self, *args: Any) -> bool:
        return self.fsm.fire(event_name, *args)

    fire.__name__ = event_name
    fire.__doc__ = f"Fire '{event_name}' without saving."
    return fire


def _make_fire_and_save(event_name: str):
    def fire_and_save(self, *args: Any) -> bool:
        return self.fsm.fire_and_save(event_name, *args)

    fire_and_save.__name__ = f"{event_name}_and_save"
    fire_and_save.__doc__ = f"Fire '{event_name}' and store the new state."
    return fire_and_save


def _make_may_fire(event_name: str):
    def may_fire(self, *args: Any) -> bool:
        return self.fsm.can_fire(event_name, *args)

    may_fire.__name__ = f"may_{event_name}"
    may_fire.__doc__ = f"True if '{event_name}' can fire now."
    return may_fire


def _install(host_type: type, name: str, member: Any) -> None:
    if hasattr(host_type, name):
        logger.debug("Kept existing %s.%s", host_type.__qualname__, name)
        return
    setattr(host_type, name, member)


class Stateful:
    """
    Mixin turning class-body ``state()``/``event()`` declarations into a
    StateMachineDefinition registered for the class.

    Class keywords: ``column=`` names the backing field, ``initial_state=``
    gives a state name or a function of the object, ``config=`` supplies a
    full MachineConfig. A subclass without declarations or keywords shares
    its ancestor's definition object.
    """

    fsm_hooks: ClassVar[Tuple[Any, ...]] = ()
    fsm = _MachineAccessor()

    def __init_subclass__(
        cls,
        column: Optional[str] = None,
        initial_state: Optional[InitialStateRule] = None,
        config: Optional[MachineConfig] = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        declarations = [
            (attr, value)
            for attr, value in list(cls.__dict__.items())
            if isinstance(value, (StateDeclaration, EventDeclaration))
        ]
        if not declarations and column is None and initial_state is None and config is None:
            return

        builder = DefinitionBuilder(registry.lookup(cls))
        if config is not None:
            builder.set_config(config)
        if column is not None:
            builder.set_column(column)
        if initial_state is not None:
            builder.set_initial_state(initial_state)

        states: List[str] = []
        events: List[str] = []
        for attr, decl in declarations:
            delattr(cls, attr)
            name = decl.name or attr
            if isinstance(decl, StateDeclaration):
                builder.declare_state(name, initial=decl.initial, on_enter=decl.on_enter, on_exit=decl.on_exit)
                states.append(name)
            else:
                builder.declare_event(name, decl.transitions)
                events.append(name)
        cls._fsm_register(builder.build(), states, events)

    @classmethod
    def _fsm_register(cls, definition: StateMachineDefinition, states: List[str], events: List[str]) -> None:
        registry.register(cls, definition)
        for name in states:
            _install(cls, f"is_{name}", _make_predicate(name))
        for name in events:
            _install(cls, name, _make_fire(name))
            _install(cls, f"{name}_and_save", _make_fire_and_save(name))
            _install(cls, f"may_{name}", _make_may_fire(name))
        ScopeRegistrar(cls).install(definition, states)
        InitialStateEnsurer.install(cls)

    @classmethod
    def fsm_definition(cls) -> StateMachineDefinition:
        """
        :raises DefinitionError: If neither the class nor an ancestor declared a machine.
        """
        definition = registry.lookup(cls)
        if definition is None:
            raise DefinitionError(f"{cls.__qualname__} declares no state machine")
        return definition

    @classmethod
    def fsm_states(cls) -> Mapping[str, State]:
        return cls.fsm_definition().states

    @classmethod
    def fsm_events(cls) -> Mapping[str, Event]:
        return cls.fsm_definition().events

    @classmethod
    def fsm_column(cls) -> str:
        return cls.fsm_definition().column

    @classmethod
    def fsm_initial_state(cls) -> Optional[InitialStateRule]:
        return cls.fsm_definition().initial_state

    @classmethod
    def _fsm_builder(cls) -> DefinitionBuilder:
        return DefinitionBuilder(registry.lookup(cls))

    @classmethod
    def declare_state(
        cls,
        name: str,
        initial: bool = False,
        on_enter: Optional[ActionSpec] = None,
        on_exit: Optional[ActionSpec] = None,
    ) -> State:
        """
        Add a state after the class was created. The class then owns its
        definition even if it previously shared an ancestor's.
        """
        definition = cls._fsm_builder().declare_state(name, initial, on_enter, on_exit).build()
        cls._fsm_register(definition, [name], [])
        return definition.state(name)

    @classmethod
    def declare_event(cls, name: str, *transitions: Transition) -> Event:
        definition = cls._fsm_builder().declare_event(name, transitions).build()
        cls._fsm_register(definition, [], [name])
        return definition.event(name)

    @classmethod
    def set_column(cls, column: str) -> None:
        cls._fsm_register(cls._fsm_builder().set_column(column).build(), [], [])

    @classmethod
    def set_initial_state(cls, rule: InitialStateRule) -> None:
        cls._fsm_register(cls._fsm_builder().set_initial_state(rule).build(), [], [])
