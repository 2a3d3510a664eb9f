"""
Persistence package: the adapter contract between machines and backing
stores, record-host support (durable writes, initial-state ensuring, scopes)
and a small in-memory record store.

``modelstate.persistence.memory`` is not imported here; it depends on the
declarative layer, which itself depends on this package.
"""

from .adapter import HostAdapter, PersistenceAdapter, detect_capabilities, resolve_adapter
from .record import InitialStateEnsurer, RecordPersistence
from .scopes import ScopeRegistrar

__all__ = [
    "HostAdapter",
    "InitialStateEnsurer",
    "PersistenceAdapter",
    "RecordPersistence",
    "ScopeRegistrar",
    "detect_capabilities",
    "resolve_adapter",
]
