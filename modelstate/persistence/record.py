# modelstate/persistence/record.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Persistence for "active record" style hosts: objects that know whether they
were saved before (``new_record``), can ``save()`` themselves returning a
bool, and offer a pre-create hook point.
"""

from __future__ import annotations

import logging
from typing import Any

from modelstate.persistence.adapter import read_field, write_field

logger = logging.getLogger(__name__)


class RecordPersistence:
    """
    Mixin providing the durable ``fsm_write_state`` capability for record
    hosts. The state is written to the backing column and the record saved;
    if the save is rejected the column is restored and False returned.
    """

    def fsm_write_state(self, state: str) -> bool:
        column = self.fsm.definition.column
        old_value = read_field(self, column)
        write_field(self, column, state)
        if not self.save():
            write_field(self, column, old_value)
            logger.debug("Save rejected for %r, restored %s=%r", self, column, old_value)
            return False
        return True


class InitialStateEnsurer:
    """
    Pre-create hook that writes the initial state into the backing column of
    a record about to be created, unless the column was set explicitly.

    The machine instance remembers that it ran, so repeated create attempts
    on the same object do not re-evaluate the initial-state rule.
    """

    def __call__(self, record: Any) -> bool:
        return record.fsm.ensure_initial_state()

    def __repr__(self) -> str:
        return "InitialStateEnsurer()"

    @classmethod
    def install(cls, host_type: type) -> bool:
        """
        Register the ensurer on ``host_type``'s pre-create hook point. A type
        whose ancestor already carries it is left alone, since hooks are
        inherited.

        :return: True if a hook was registered.
        """
        register = getattr(host_type, "register_pre_create_hook", None)
        if register is None:
            return False
        if getattr(host_type, "_fsm_initial_state_ensurer", None) is not None:
            return False
        ensurer = cls()
        register(ensurer)
        host_type._fsm_initial_state_ensurer = ensurer
        logger.debug("Installed %r on %s", ensurer, host_type.__qualname__)
        return True
