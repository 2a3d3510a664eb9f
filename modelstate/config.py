# modelstate/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""Machine configuration and its loader."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Union

DEFAULT_COLUMN = "fsm_state"


@dataclass(frozen=True)
class MachineConfig:
    """Per-type machine configuration."""

    column: str = DEFAULT_COLUMN
    whiny_transitions: bool = True
    create_scopes: bool = True

    def replace(self, **changes: Any) -> "MachineConfig":
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "MachineConfig":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(raw) - known
        if unknown:
            raise ValueError(f"Unknown machine config keys: {', '.join(sorted(unknown))}")
        return cls(**dict(raw))


DEFAULT_CONFIG = MachineConfig()


def _normalize_path(path: Union[Path, str]) -> Path:
    return path if isinstance(path, Path) else Path(path)


def load_config(config_path: Union[Path, str]) -> MachineConfig:
    """Load a MachineConfig from a JSON file.

    The file may hold the settings at the top level or under a
    ``"modelstate"`` key.
    """

    config_path = _normalize_path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")
    if config_path.suffix.lower() != ".json":
        raise ValueError(f"Unsupported config format: {config_path.suffix}")

    with config_path.open("r", encoding="utf-8") as stream:
        raw: Dict[str, Any] = json.load(stream) or {}
    if "modelstate" in raw:
        raw = raw["modelstate"] or {}
    return MachineConfig.from_mapping(raw)
