# modelstate/core/states.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from modelstate.core.actions import ActionSpec, run_callbacks


@dataclass(frozen=True)
class State:
    """
    A named state of a machine definition. Immutable, so a single instance is
    shared by every object of the declaring type.

    :param name: Identifier, unique within its definition.
    :param initial: Whether the state was flagged as the initial one.
    :param on_enter: Callback run after a transition into this state succeeded.
    :param on_exit: Callback run after a transition out of this state succeeded.
    """

    name: str
    initial: bool = False
    on_enter: Optional[ActionSpec] = None
    on_exit: Optional[ActionSpec] = None

    def enter(self, host: Any, *args: Any) -> None:
        """Execute the entry callback, if any."""
        if self.on_enter is not None:
            run_callbacks([self.on_enter], host, *args)

    def exit(self, host: Any, *args: Any) -> None:
        """Execute the exit callback, if any."""
        if self.on_exit is not None:
            run_callbacks([self.on_exit], host, *args)

    def __str__(self) -> str:
        return self.name
