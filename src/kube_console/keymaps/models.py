"""Dataclasses describing keymap bindings and the actions they run."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping

from kube_console.buffer import EditorMode

KEY_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "<Esc>": "ESC",
        "ESCAPE": "ESC",
        "escape": "ESC",
        "RETURN": "ENTER",
        "return": "ENTER",
        "enter": "ENTER",
        "<CR>": "ENTER",
        "backspace": "BACKSPACE",
        "<BS>": "BACKSPACE",
    }
)


def normalize_key(key: str) -> str:
    return KEY_ALIASES.get(key, key)


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named handler a binding dispatches to."""

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates one key in one mode with an action."""

    id: str
    mode: EditorMode
    key: str
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.key:
            raise ValueError("binding key cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        object.__setattr__(self, "mode", EditorMode(self.mode))
        object.__setattr__(self, "key", normalize_key(self.key))


__all__ = ["ActionRef", "Binding", "KEY_ALIASES", "normalize_key"]
