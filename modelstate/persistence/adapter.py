# modelstate/persistence/adapter.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
The persistence-adapter contract between the engine and a backing store.

A host type may implement any of three capabilities as methods:

- ``fsm_read_state(self) -> str | None``
- ``fsm_write_state(self, state) -> bool``
- ``fsm_write_state_without_persistence(self, state) -> None``

Each missing capability falls back to plain attribute access on the
definition's backing column. Which capabilities a type provides is decided
once per type by :func:`resolve_adapter` and cached.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, FrozenSet, Optional, Tuple

from modelstate.interfaces.types import StateID

READ_STATE = "fsm_read_state"
WRITE_STATE = "fsm_write_state"
WRITE_STATE_WITHOUT_PERSISTENCE = "fsm_write_state_without_persistence"
CAPABILITIES: Tuple[str, ...] = (READ_STATE, WRITE_STATE, WRITE_STATE_WITHOUT_PERSISTENCE)


def is_blank(value: Any) -> bool:
    """None and empty strings both mean "no state stored"."""
    return value is None or value == ""


def read_field(host: Any, column: str) -> Any:
    return getattr(host, column, None)


def write_field(host: Any, column: str, value: Any) -> None:
    setattr(host, column, value)


class PersistenceAdapter:
    """
    Default adapter: the backing field is a plain attribute on the host and
    every write succeeds.
    """

    capabilities: FrozenSet[str] = frozenset()

    @property
    def reads_natively(self) -> bool:
        """True if the host resolves its own state, initial state included."""
        return READ_STATE in self.capabilities

    def read_state(self, host: Any, column: str) -> Optional[StateID]:
        value = read_field(host, column)
        return None if is_blank(value) else str(value)

    def write_state(self, host: Any, column: str, state: StateID) -> bool:
        write_field(host, column, state)
        return True

    def write_state_without_persistence(self, host: Any, column: str, state: StateID) -> None:
        write_field(host, column, state)

    def is_new(self, host: Any) -> bool:
        """Plain objects have no persisted identity, so they are always new."""
        return True


class HostAdapter(PersistenceAdapter):
    """
    Adapter for a host type that implements some of the capabilities itself.
    Dispatch is fixed at construction from the type, never probed per call.
    """

    def __init__(self, capabilities: FrozenSet[str], tracks_identity: bool = False) -> None:
        """
        :param capabilities: Names of the capability methods the host type defines.
        :param tracks_identity: Whether the type exposes ``new_record``.
        """
        self.capabilities = frozenset(capabilities)
        self._tracks_identity = tracks_identity

    def read_state(self, host: Any, column: str) -> Optional[StateID]:
        if READ_STATE in self.capabilities:
            value = host.fsm_read_state()
            return None if is_blank(value) else str(value)
        return super().read_state(host, column)

    def write_state(self, host: Any, column: str, state: StateID) -> bool:
        if WRITE_STATE in self.capabilities:
            return bool(host.fsm_write_state(state))
        return super().write_state(host, column, state)

    def write_state_without_persistence(self, host: Any, column: str, state: StateID) -> None:
        if WRITE_STATE_WITHOUT_PERSISTENCE in self.capabilities:
            host.fsm_write_state_without_persistence(state)
        else:
            super().write_state_without_persistence(host, column, state)

    def is_new(self, host: Any) -> bool:
        if self._tracks_identity:
            return bool(host.new_record)
        return True

    def __repr__(self) -> str:
        return f"HostAdapter(capabilities={sorted(self.capabilities)!r})"


_adapter_cache: Dict[type, PersistenceAdapter] = {}
_adapter_lock = threading.Lock()


def detect_capabilities(host_type: type) -> FrozenSet[str]:
    """
    Return the capability methods ``host_type`` defines, inherited ones included.
    """
    return frozenset(name for name in CAPABILITIES if callable(getattr(host_type, name, None)))


def resolve_adapter(host_type: type) -> PersistenceAdapter:
    """
    Return the adapter for ``host_type``, resolving its capabilities on first use.
    """
    with _adapter_lock:
        adapter = _adapter_cache.get(host_type)
        if adapter is None:
            adapter = HostAdapter(detect_capabilities(host_type), tracks_identity=hasattr(host_type, "new_record"))
            _adapter_cache[host_type] = adapter
        return adapter
