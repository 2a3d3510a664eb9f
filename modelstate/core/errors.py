# modelstate/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Optional


class FSMError(Exception):
    """
    Base exception class for errors raised by the state machine library.
    """


class DefinitionError(FSMError):
    """
    Raised while a type declares its machine when the declarations are malformed,
    e.g. two unconditional initial states or a transition naming an undeclared state.
    """


class UndefinedStateError(FSMError):
    """
    Raised when a requested state does not exist in the machine definition.
    """


class UndefinedEventError(FSMError):
    """
    Raised when an event that was never declared is fired or looked up.
    """


class TransitionError(FSMError):
    """
    Raised when an attempted state transition is invalid or cannot be completed.
    """


class FailedTransition(TransitionError):
    """
    Raised by the persisting fire variant when no transition of the event
    matches the current state.
    """

    def __init__(self, event: str, state: Optional[str], message: Optional[str] = None) -> None:
        self.event = event
        self.state = state
        super().__init__(message or f"Event '{event}' cannot transition from '{state}'")


class CallbackError(TransitionError):
    """
    Raised when a guard or callback attached to a transition or state fails.
    The original exception is available as ``__cause__``.
    """

    def __init__(self, message: str, callback: Any = None) -> None:
        self.callback = callback
        super().__init__(message)
