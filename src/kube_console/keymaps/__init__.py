"""Declarative keymap registry.

Default bindings live in :mod:`kube_console.keymaps.defaults`.
"""

from .models import ActionRef, Binding, normalize_key
from .registry import (
    KeymapConflictError,
    KeymapRegistry,
    RegistryStats,
    ResolutionMatch,
)

__all__ = [
    "ActionRef",
    "Binding",
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
    "ResolutionMatch",
    "normalize_key",
]
