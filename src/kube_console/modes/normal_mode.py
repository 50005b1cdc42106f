"""Normal mode: only keymap bindings do anything here."""

from __future__ import annotations

from kube_console.buffer import EditorMode

from .base_mode import Mode


class NormalMode(Mode):
    name = EditorMode.NORMAL
