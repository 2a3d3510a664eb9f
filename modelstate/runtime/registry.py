# modelstate/runtime/registry.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

from modelstate.core.definition import StateMachineDefinition

logger = logging.getLogger(__name__)


class DefinitionRegistry:
    """
    Maps host types to their machine definitions, keyed by type identity.

    Only types that declare something are registered. Looking up any other
    type delegates to the nearest registered ancestor in its MRO, so a derived
    type without declarations of its own gets the very same definition object
    as its ancestor. Lookups are memoized per type; registering a definition
    clears the memo because late declarations may change what descendants see.
    """

    def __init__(self) -> None:
        self._definitions: Dict[type, StateMachineDefinition] = {}
        self._resolved: Dict[type, Optional[StateMachineDefinition]] = {}
        self._lock = threading.Lock()

    def register(self, host_type: type, definition: StateMachineDefinition) -> None:
        with self._lock:
            self._definitions[host_type] = definition
            self._resolved.clear()
        logger.debug("Registered %r for %s", definition, host_type.__qualname__)

    def owns(self, host_type: type) -> bool:
        """True if ``host_type`` registered a definition itself."""
        with self._lock:
            return host_type in self._definitions

    def lookup(self, host_type: type) -> Optional[StateMachineDefinition]:
        """
        Return the definition of ``host_type`` or of its nearest registered
        ancestor, or None.
        """
        with self._lock:
            if host_type in self._resolved:
                return self._resolved[host_type]
            found = None
            for klass in host_type.__mro__:
                if klass in self._definitions:
                    found = self._definitions[klass]
                    break
            self._resolved[host_type] = found
            return found


registry = DefinitionRegistry()
