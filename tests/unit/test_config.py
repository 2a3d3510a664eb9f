# tests/unit/test_config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import dataclasses
import json

import pytest

from modelstate.config import DEFAULT_COLUMN, DEFAULT_CONFIG, MachineConfig, load_config


def test_defaults():
    assert DEFAULT_CONFIG.column == DEFAULT_COLUMN == "fsm_state"
    assert DEFAULT_CONFIG.whiny_transitions is True
    assert DEFAULT_CONFIG.create_scopes is True


def test_config_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.column = "status"


def test_replace_returns_new_config():
    changed = DEFAULT_CONFIG.replace(column="status")
    assert changed.column == "status"
    assert DEFAULT_CONFIG.column == "fsm_state"


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(ValueError, match="colour"):
        MachineConfig.from_mapping({"colour": "red"})


def test_load_flat_config(tmp_path):
    path = tmp_path / "fsm.json"
    path.write_text(json.dumps({"column": "status", "whiny_transitions": False}), encoding="utf-8")
    config = load_config(path)
    assert config == MachineConfig(column="status", whiny_transitions=False)


def test_load_nested_config(tmp_path):
    path = tmp_path / "app.json"
    path.write_text(json.dumps({"modelstate": {"create_scopes": False}}), encoding="utf-8")
    assert load_config(str(path)).create_scopes is False


def test_load_empty_section(tmp_path):
    path = tmp_path / "app.json"
    path.write_text(json.dumps({"modelstate": None}), encoding="utf-8")
    assert load_config(path) == DEFAULT_CONFIG


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.json")


def test_load_unsupported_format(tmp_path):
    path = tmp_path / "fsm.yaml"
    path.write_text("column: status\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported"):
        load_config(path)
