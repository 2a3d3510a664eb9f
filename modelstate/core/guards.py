# modelstate/core/guards.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Optional

from modelstate.core.actions import ActionSpec, _ActionAdapter, callback_name
from modelstate.core.errors import CallbackError


class _GuardAdapter:
    """
    Internal class adapting a guard callable, or a host method name, to a
    consistent ``check(host, *args)`` call.
    """

    def __init__(self, guard: Optional[ActionSpec]) -> None:
        self._guard = guard

    def check(self, host: Any, *args: Any) -> bool:
        """
        Evaluate the guard. A missing guard always passes.

        :raises CallbackError: If the guard itself raises.
        """
        if self._guard is None:
            return True
        try:
            return bool(_ActionAdapter(self._guard).run(host, *args))
        except Exception as e:
            raise CallbackError(f"Guard {callback_name(self._guard)} failed: {e}", callback=self._guard) from e
