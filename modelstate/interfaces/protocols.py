# modelstate/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Optional, Protocol, runtime_checkable

from modelstate.interfaces.types import StateID


@runtime_checkable
class ReadState(Protocol):
    """
    Host capability: resolve the persisted state of the object.

    Runtime Invariants:
    - Returns None when the object has no state stored.
    - Has no side effects on the backing record.
    """

    def fsm_read_state(self) -> Optional[StateID]:
        """Return the state currently stored for this object, or None."""
        ...


@runtime_checkable
class WriteState(Protocol):
    """
    Host capability: store a new state durably.

    Runtime Invariants:
    - Returns True only if the backing store accepted the write.
    - On a False return the backing field holds its previous value.
    """

    def fsm_write_state(self, state: StateID) -> bool:
        """Durably store ``state``; return whether the write succeeded."""
        ...


@runtime_checkable
class WriteStateWithoutPersistence(Protocol):
    """
    Host capability: set the state in memory only, leaving durability to a
    later save of the object.
    """

    def fsm_write_state_without_persistence(self, state: StateID) -> None:
        """Assign ``state`` to the backing field without saving."""
        ...


@runtime_checkable
class PreCreateHost(Protocol):
    """
    Host type capability: a single hook point fired while an object is being
    created for the first time. A hook returning False aborts creation.
    """

    @classmethod
    def register_pre_create_hook(cls, hook: Any) -> None: ...


@runtime_checkable
class QueryableHost(Protocol):
    """
    Host type capability: filter stored records by attribute equality.
    """

    @classmethod
    def where(cls, **criteria: Any) -> Any: ...


@runtime_checkable
class Hook(Protocol):
    """
    Observer of machine lifecycle events. All methods are optional; the
    HookManager only calls the ones a hook defines.
    """

    def on_enter(self, host: Any, state: StateID) -> None: ...

    def on_exit(self, host: Any, state: StateID) -> None: ...

    def on_event_fired(self, host: Any, event: str, from_state: Optional[StateID], to_state: StateID) -> None: ...

    def on_event_failed(self, host: Any, event: str, from_state: Optional[StateID]) -> None: ...

    def on_error(self, host: Any, error: Exception) -> None: ...
