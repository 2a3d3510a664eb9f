# tests/unit/core/test_guards.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from modelstate.core.errors import CallbackError
from modelstate.core.guards import _GuardAdapter


def test_missing_guard_passes(host):
    assert _GuardAdapter(None).check(host) is True


def test_guard_result_is_coerced_to_bool(host):
    assert _GuardAdapter(lambda h: 1).check(host) is True
    assert _GuardAdapter(lambda h: []).check(host) is False


def test_guard_by_method_name():
    host = MagicMock()
    host.ready.return_value = False
    assert _GuardAdapter("ready").check(host, 5) is False
    host.ready.assert_called_once_with(5)


def test_guard_failure_is_wrapped(host):
    with pytest.raises(CallbackError, match="Guard"):
        _GuardAdapter(lambda h: h.missing).check(host)
