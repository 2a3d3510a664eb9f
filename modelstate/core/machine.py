# modelstate/core/machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, List, Optional

from modelstate.core.definition import StateMachineDefinition
from modelstate.core.errors import CallbackError, FailedTransition
from modelstate.core.hooks import HookManager
from modelstate.core.transitions import Transition
from modelstate.persistence.adapter import PersistenceAdapter, is_blank, read_field, resolve_adapter, write_field

logger = logging.getLogger(__name__)


class MachineInstance:
    """
    Binds a StateMachineDefinition to one host object. The current state lives
    in the host's backing field; the instance itself only remembers whether
    the initial state was already ensured.

    Not safe for concurrent ``fire`` calls on the same host without external
    synchronization.
    """

    def __init__(
        self,
        definition: StateMachineDefinition,
        host: Any,
        adapter: Optional[PersistenceAdapter] = None,
        hooks: Optional[HookManager] = None,
    ) -> None:
        """
        :param definition: The machine definition of the host's type.
        :param host: The object whose backing field holds the state.
        :param adapter: Persistence adapter; resolved from the host's type when omitted.
        :param hooks: Lifecycle observers.
        """
        self._definition = definition
        self._host = host
        self._adapter = adapter if adapter is not None else resolve_adapter(type(host))
        self._hooks = hooks or HookManager()
        self._initial_state_ensured = False

    @property
    def definition(self) -> StateMachineDefinition:
        return self._definition

    @property
    def host(self) -> Any:
        return self._host

    @property
    def adapter(self) -> PersistenceAdapter:
        return self._adapter

    @property
    def hooks(self) -> HookManager:
        return self._hooks

    @property
    def initial_state_ensured(self) -> bool:
        return self._initial_state_ensured

    def current_state(self) -> Optional[str]:
        """
        Resolve the current state. A new object with an empty backing field is
        in its initial state; an existing object with an empty field has no
        state and None is returned. A host with its own reader decides alone.
        """
        column = self._definition.column
        adapter = self._adapter
        if not adapter.reads_natively and adapter.is_new(self._host) and is_blank(read_field(self._host, column)):
            return self._definition.initial_state_for(self._host)
        return adapter.read_state(self._host, column)

    def is_state(self, name: str) -> bool:
        return self.current_state() == name

    def fire(self, event: str, *args: Any) -> bool:
        """
        Fire ``event`` and keep the new state in memory only.

        :return: True if a transition was taken, False if none matched.
        """
        return self._fire(event, args, persist=False)

    def fire_and_save(self, event: str, *args: Any) -> bool:
        """
        Fire ``event`` and store the new state durably through the adapter.

        :return: True on success, False if the durable write was rejected.
        :raises FailedTransition: If no transition matched (and the machine is
            configured with ``whiny_transitions``).
        """
        return self._fire(event, args, persist=True)

    def can_fire(self, event: str, *args: Any) -> bool:
        """
        Check whether firing ``event`` now would take a transition. Guards are
        evaluated; nothing is written.
        """
        return self._select(event, self.current_state(), args) is not None

    def permitted_events(self, *args: Any) -> List[str]:
        """Names of the events that can currently fire, in declaration order."""
        state = self.current_state()
        return [name for name in self._definition.events if self._select(name, state, args) is not None]

    def ensure_initial_state(self) -> bool:
        """
        Write the initial state into an empty backing field, in memory only.
        Writes at most once per bound object; a call that finds the field
        already set does not count. Always returns True so it can serve
        directly as a pre-create hook.
        """
        if self._initial_state_ensured:
            return True
        column = self._definition.column
        if not is_blank(read_field(self._host, column)):
            return True
        initial = self._definition.initial_state_for(self._host)
        if initial is not None:
            self._adapter.write_state_without_persistence(self._host, column, initial)
            logger.debug("Ensured initial state %r on %r", initial, self._host)
        self._initial_state_ensured = True
        return True

    def rebind(self, definition: StateMachineDefinition) -> None:
        """
        Switch to a newer definition of the host's type, e.g. after a late
        declaration. Per-object state, hooks and the adapter are kept.
        """
        self._definition = definition

    def _select(self, event: str, state: Optional[str], args: tuple) -> Optional[Transition]:
        return self._definition.event(event).select(self._host, state, *args)

    def _fire(self, event: str, args: tuple, persist: bool) -> bool:
        column = self._definition.column
        from_state = self.current_state()
        try:
            transition = self._select(event, from_state, args)
        except CallbackError as e:
            self._hooks.execute_on_error(self._host, e)
            raise

        if transition is None:
            logger.debug("Event %r cannot fire from state %r on %r", event, from_state, self._host)
            self._hooks.execute_on_event_failed(self._host, event, from_state)
            if persist and self._definition.config.whiny_transitions:
                raise FailedTransition(event, from_state)
            return False

        try:
            transition.execute_before(self._host, *args)
        except CallbackError as e:
            self._hooks.execute_on_error(self._host, e)
            raise

        previous = read_field(self._host, column)
        if persist:
            if not self._adapter.write_state(self._host, column, transition.to):
                write_field(self._host, column, previous)
                logger.warning(
                    "Durable write of state %r rejected for %r; kept state %r",
                    transition.to,
                    self._host,
                    from_state,
                )
                self._hooks.execute_on_event_failed(self._host, event, from_state)
                return False
        else:
            self._adapter.write_state_without_persistence(self._host, column, transition.to)

        self._after_transition(event, transition, from_state, args)
        return True

    def _after_transition(self, event: str, transition: Transition, from_state: Optional[str], args: tuple) -> None:
        states = self._definition.states
        try:
            if from_state in states:
                states[from_state].exit(self._host, *args)
                self._hooks.execute_on_exit(self._host, from_state)
            states[transition.to].enter(self._host, *args)
            self._hooks.execute_on_enter(self._host, transition.to)
            transition.execute_after(self._host, *args)
        except CallbackError as e:
            self._hooks.execute_on_error(self._host, e)
            raise
        logger.debug("Event %r moved %r from %r to %r", event, self._host, from_state, transition.to)
        self._hooks.execute_on_event_fired(self._host, event, from_state, transition.to)

    def __repr__(self) -> str:
        return f"MachineInstance(host={self._host!r}, {self._definition.column}={read_field(self._host, self._definition.column)!r})"
