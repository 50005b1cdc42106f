"""Mode, exit reason, and per-session editor state."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .document import EditableDocument


class EditorMode(str, Enum):
    """Available editor modes."""

    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"

    @property
    def label(self) -> str:
        return self.value.upper()


class ExitReason(str, Enum):
    """How an editor session ended."""

    WRITE_QUIT = "write_quit"
    QUIT = "quit"
    FORCE_QUIT = "force_quit"


@dataclass(slots=True)
class EditorState:
    """Mutable state owned by exactly one editor session."""

    mode: EditorMode = EditorMode.NORMAL
    buffer: str = ""
    command_line: str = ""
    status_message: str = ""
    dirty: bool = False

    @classmethod
    def for_document(cls, document: EditableDocument) -> "EditorState":
        return cls(buffer=document.content)

    def refresh_dirty(self, original: str) -> bool:
        self.dirty = self.buffer != original
        return self.dirty

    def snapshot(self) -> "EditorState":
        return replace(self)
