"""Editable documents and editor session state."""

from .document import EditableDocument
from .state import EditorMode, EditorState, ExitReason

__all__ = [
    "EditableDocument",
    "EditorMode",
    "EditorState",
    "ExitReason",
]
