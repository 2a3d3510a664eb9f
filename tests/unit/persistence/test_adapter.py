# tests/unit/persistence/test_adapter.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from types import SimpleNamespace

from modelstate.persistence.adapter import (
    READ_STATE,
    WRITE_STATE,
    WRITE_STATE_WITHOUT_PERSISTENCE,
    HostAdapter,
    PersistenceAdapter,
    detect_capabilities,
    is_blank,
    resolve_adapter,
)


def test_is_blank():
    assert is_blank(None)
    assert is_blank("")
    assert not is_blank("open")
    assert not is_blank(0)


def test_default_adapter_uses_plain_attribute():
    adapter = PersistenceAdapter()
    host = SimpleNamespace()
    assert adapter.read_state(host, "status") is None
    assert adapter.write_state(host, "status", "open") is True
    assert host.status == "open"
    assert adapter.read_state(host, "status") == "open"
    adapter.write_state_without_persistence(host, "status", "closed")
    assert host.status == "closed"
    assert adapter.is_new(host) is True
    assert adapter.reads_natively is False


def test_default_adapter_reads_empty_as_none():
    host = SimpleNamespace(status="")
    assert PersistenceAdapter().read_state(host, "status") is None


def test_detect_capabilities():
    class Reader:
        def fsm_read_state(self):
            return "fi"

    class Writer:
        def fsm_write_state(self, state):
            return True

    class Transient:
        def fsm_write_state_without_persistence(self, state):
            pass

    class All(Reader, Writer, Transient):
        pass

    assert detect_capabilities(Reader) == {READ_STATE}
    assert detect_capabilities(Writer) == {WRITE_STATE}
    assert detect_capabilities(Transient) == {WRITE_STATE_WITHOUT_PERSISTENCE}
    assert detect_capabilities(All) == {READ_STATE, WRITE_STATE, WRITE_STATE_WITHOUT_PERSISTENCE}
    assert detect_capabilities(object) == frozenset()


def test_non_callable_attribute_is_not_a_capability():
    class Odd:
        fsm_read_state = "not a method"

    assert detect_capabilities(Odd) == frozenset()


def test_resolve_adapter_is_cached_per_type():
    class Gate:
        pass

    class SubGate(Gate):
        pass

    assert resolve_adapter(Gate) is resolve_adapter(Gate)
    assert resolve_adapter(Gate) is not resolve_adapter(SubGate)


def test_host_adapter_delegates_to_host():
    class Host:
        def __init__(self):
            self.written = []

        def fsm_read_state(self):
            return "fi"

        def fsm_write_state(self, state):
            self.written.append(("durable", state))
            return 0

        def fsm_write_state_without_persistence(self, state):
            self.written.append(("transient", state))

    host = Host()
    adapter = resolve_adapter(Host)
    assert adapter.reads_natively
    assert adapter.read_state(host, "fsm_state") == "fi"
    assert adapter.write_state(host, "fsm_state", "fo") is False
    adapter.write_state_without_persistence(host, "fsm_state", "fum")
    assert host.written == [("durable", "fo"), ("transient", "fum")]
    assert not hasattr(host, "fsm_state")


def test_host_adapter_falls_back_per_capability():
    class Host:
        def fsm_write_state(self, state):
            self.saved = state
            return True

    host = Host()
    adapter = resolve_adapter(Host)
    adapter.write_state_without_persistence(host, "phase", "a")
    assert host.phase == "a"
    assert adapter.read_state(host, "phase") == "a"
    assert adapter.write_state(host, "phase", "b") is True
    assert host.saved == "b"


def test_host_reader_result_is_stringified():
    class Host:
        def fsm_read_state(self):
            return 3

    assert resolve_adapter(Host).read_state(Host(), "fsm_state") == "3"


def test_is_new_follows_new_record():
    class Row:
        new_record = True

        def __init__(self, new_record):
            self.new_record = new_record

    adapter = resolve_adapter(Row)
    assert adapter.is_new(Row(True)) is True
    assert adapter.is_new(Row(False)) is False


def test_is_new_without_identity_tracking():
    adapter = HostAdapter(frozenset())
    assert adapter.is_new(SimpleNamespace(new_record=False)) is True
    assert "HostAdapter" in repr(adapter)
