"""modelstate: declarative finite state machines bound to domain objects.

Declare states and events on a class, and each object gets a machine whose
current state lives in one of its fields. An optional persistence layer
keeps that field in sync with a backing record: durable writes, the initial
state filled in on create, and one query scope per state.
"""

import logging

from modelstate.config import DEFAULT_CONFIG, MachineConfig, load_config
from modelstate.core.definition import DefinitionBuilder, StateMachineDefinition
from modelstate.core.errors import (
    CallbackError,
    DefinitionError,
    FailedTransition,
    FSMError,
    TransitionError,
    UndefinedEventError,
    UndefinedStateError,
)
from modelstate.core.events import Event
from modelstate.core.hooks import Hook, HookManager
from modelstate.core.machine import MachineInstance
from modelstate.core.states import State
from modelstate.core.transitions import Transition, transition
from modelstate.persistence.adapter import PersistenceAdapter, resolve_adapter
from modelstate.persistence.memory import MemoryStore, Record, RecordInvalid, RecordNotFound, StatefulRecord
from modelstate.runtime.logging import configure_logging
from modelstate.stateful import Stateful, event, state

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "CallbackError",
    "DEFAULT_CONFIG",
    "DefinitionBuilder",
    "DefinitionError",
    "Event",
    "FSMError",
    "FailedTransition",
    "Hook",
    "HookManager",
    "MachineConfig",
    "MachineInstance",
    "MemoryStore",
    "PersistenceAdapter",
    "Record",
    "RecordInvalid",
    "RecordNotFound",
    "State",
    "StateMachineDefinition",
    "Stateful",
    "StatefulRecord",
    "Transition",
    "TransitionError",
    "UndefinedEventError",
    "UndefinedStateError",
    "configure_logging",
    "event",
    "load_config",
    "resolve_adapter",
    "state",
    "transition",
]
