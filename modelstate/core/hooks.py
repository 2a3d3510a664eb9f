# modelstate/core/hooks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, List, Optional

from modelstate.interfaces.protocols import Hook as HookProtocol


class Hook:
    """
    No-op base for hook objects. Subclass and override the methods you need.
    """

    def on_enter(self, host: Any, state: str) -> None:
        pass

    def on_exit(self, host: Any, state: str) -> None:
        pass

    def on_event_fired(self, host: Any, event: str, from_state: Optional[str], to_state: str) -> None:
        pass

    def on_event_failed(self, host: Any, event: str, from_state: Optional[str]) -> None:
        pass

    def on_error(self, host: Any, error: Exception) -> None:
        pass


class HookManager:
    """
    Manages the registration and execution of hooks that listen to machine
    lifecycle events (state enter/exit, event fired/failed, errors). Users can
    attach logging, monitoring or auditing without altering core logic.
    """

    def __init__(self, hooks: Optional[List[HookProtocol]] = None) -> None:
        """
        Initialize with an optional list of hook objects.
        """
        self._hooks: List[HookProtocol] = list(hooks or [])

    @property
    def hooks(self) -> List[HookProtocol]:
        return list(self._hooks)

    def register_hook(self, hook: HookProtocol) -> None:
        """
        Add a new hook to the manager's list of hooks.

        :param hook: An object implementing any of the HookProtocol methods.
        """
        self._hooks.append(hook)

    def execute_on_enter(self, host: Any, state: str) -> None:
        _HookInvoker(self._hooks).invoke("on_enter", host, state)

    def execute_on_exit(self, host: Any, state: str) -> None:
        _HookInvoker(self._hooks).invoke("on_exit", host, state)

    def execute_on_event_fired(self, host: Any, event: str, from_state: Optional[str], to_state: str) -> None:
        _HookInvoker(self._hooks).invoke("on_event_fired", host, event, from_state, to_state)

    def execute_on_event_failed(self, host: Any, event: str, from_state: Optional[str]) -> None:
        _HookInvoker(self._hooks).invoke("on_event_failed", host, event, from_state)

    def execute_on_error(self, host: Any, error: Exception) -> None:
        _HookInvoker(self._hooks).invoke("on_error", host, error)


class _HookInvoker:
    """
    Internal helper that iterates through hooks and calls the named lifecycle
    method on each hook that defines it, in registration order.
    """

    def __init__(self, hooks: List[HookProtocol]) -> None:
        self._hooks = hooks

    def invoke(self, method: str, *args: Any) -> None:
        for hook in self._hooks:
            fn = getattr(hook, method, None)
            if fn is not None:
                fn(*args)


class HostCallbacks(Hook):
    """
    Forwards event outcomes to optional methods on the host itself:
    ``fsm_event_fired(event, from_state, to_state)`` and
    ``fsm_event_failed(event, from_state)``.
    """

    def on_event_fired(self, host: Any, event: str, from_state: Optional[str], to_state: str) -> None:
        fn = getattr(host, "fsm_event_fired", None)
        if fn is not None:
            fn(event, from_state, to_state)

    def on_event_failed(self, host: Any, event: str, from_state: Optional[str]) -> None:
        fn = getattr(host, "fsm_event_failed", None)
        if fn is not None:
            fn(event, from_state)
