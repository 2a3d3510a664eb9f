"""
Runtime package: the per-type definition registry and logging setup.
"""

from .registry import DefinitionRegistry, registry

__all__ = ["DefinitionRegistry", "registry"]
