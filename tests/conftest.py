# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture(autouse=True)
def clean_store():
    """Every test starts and ends with an empty default record store."""
    from modelstate.persistence.memory import default_store

    default_store.clear()
    yield default_store
    default_store.clear()


@pytest.fixture
def host():
    """A plain object with no persistence capabilities."""

    class Host:
        pass

    return Host()


@pytest.fixture
def dummy_guard():
    """A guard function that always returns True."""
    return lambda host, *args: True


@pytest.fixture
def dummy_action():
    """A simple callback (no-op)."""
    return lambda host, *args: None


@pytest.fixture
def dummy_hooks():
    """A list of hook mocks for testing HookManager."""
    hook = MagicMock()
    hook.on_enter = MagicMock()
    hook.on_exit = MagicMock()
    hook.on_event_fired = MagicMock()
    hook.on_event_failed = MagicMock()
    hook.on_error = MagicMock()
    return [hook]


@pytest.fixture
def error_classes():
    """Provides a tuple of error classes for quick reference."""
    from modelstate.core.errors import (
        CallbackError,
        DefinitionError,
        FailedTransition,
        FSMError,
        TransitionError,
        UndefinedEventError,
        UndefinedStateError,
    )

    return (
        FSMError,
        DefinitionError,
        UndefinedStateError,
        UndefinedEventError,
        TransitionError,
        FailedTransition,
        CallbackError,
    )


@pytest.fixture
def door_definition():
    """closed <-> open, with lock/unlock on the side; 'closed' is initial."""
    from modelstate.core.definition import DefinitionBuilder
    from modelstate.core.transitions import transition

    return (
        DefinitionBuilder()
        .declare_state("closed", initial=True)
        .declare_state("open")
        .declare_state("locked")
        .declare_event("open", [transition(to="open", from_="closed")])
        .declare_event("close", [transition(to="closed", from_="open")])
        .declare_event("lock", [transition(to="locked", from_="closed")])
        .declare_event("unlock", [transition(to="closed", from_="locked")])
        .set_column("door_state")
        .build()
    )
