# modelstate/core/actions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Callable, Iterable, Union

from modelstate.core.errors import CallbackError

ActionSpec = Union[Callable[..., Any], str]


class _ActionAdapter:
    """
    Internal adapter that wraps a user-defined callback, or the name of a method
    on the host, so every callback is invoked the same way: ``fn(host, *args)``.
    """

    def __init__(self, action: ActionSpec) -> None:
        """
        :param action: A callable taking the host first, or a host method name.
        """
        self._action = action

    @property
    def action(self) -> ActionSpec:
        return self._action

    def run(self, host: Any, *args: Any) -> Any:
        """
        Execute the callback against ``host``.

        :param host: The object the machine is bound to.
        :param args: Extra arguments given when the event was fired.
        """
        if isinstance(self._action, str):
            return getattr(host, self._action)(*args)
        return self._action(host, *args)


def callback_name(action: ActionSpec) -> str:
    if isinstance(action, str):
        return action
    return getattr(action, "__qualname__", None) or repr(action)


def run_callbacks(actions: Iterable[ActionSpec], host: Any, *args: Any) -> None:
    """
    Run each callback in order, wrapping failures in CallbackError.

    :raises CallbackError: If any callback raises.
    """
    for action in actions:
        try:
            _ActionAdapter(action).run(host, *args)
        except Exception as e:
            raise CallbackError(f"Callback {callback_name(action)} failed: {e}", callback=action) from e
