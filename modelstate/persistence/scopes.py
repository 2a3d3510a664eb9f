# modelstate/persistence/scopes.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from modelstate.core.definition import StateMachineDefinition

logger = logging.getLogger(__name__)


def _make_scope(state: str) -> classmethod:
    def scope(cls: type) -> Any:
        return cls.where(**{cls.fsm_column(): state})

    scope.__name__ = state
    scope.__qualname__ = state
    scope.__doc__ = f"All records currently in state '{state}'."
    return classmethod(scope)


class ScopeRegistrar:
    """
    Installs one named query per declared state on a host type, e.g.
    ``Order.paid()`` returning ``Order.where(status="paid")``.

    A name the type already exposes, whether user-defined, inherited or
    installed earlier, is never overridden.
    """

    def __init__(self, host_type: type) -> None:
        self._host_type = host_type

    def supported(self) -> bool:
        """Scopes need the host type to expose a ``where`` query."""
        return callable(getattr(self._host_type, "where", None))

    def install(self, definition: StateMachineDefinition, states: Optional[Iterable[str]] = None) -> List[str]:
        """
        Install scopes for ``states`` (default: every declared state).

        :return: The names that were actually installed.
        """
        if not definition.config.create_scopes or not self.supported():
            return []
        installed: List[str] = []
        for name in definition.state_names() if states is None else states:
            if hasattr(self._host_type, name):
                logger.debug("Skipped scope %s.%s: name already taken", self._host_type.__qualname__, name)
                continue
            setattr(self._host_type, name, _make_scope(name))
            installed.append(name)
        if installed:
            logger.debug("Installed scopes %s on %s", installed, self._host_type.__qualname__)
        return installed
