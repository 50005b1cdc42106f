"""Editing verbs bound to keys across modes."""

from .core import (
    cancel_command_line,
    enter_command_mode,
    enter_insert_mode,
    exit_to_normal_mode,
)
from .command import (
    NO_WRITE_SINCE_LAST_CHANGE,
    NOT_AN_EDITOR_COMMAND,
    submit_command_line,
)

__all__ = [
    "NOT_AN_EDITOR_COMMAND",
    "NO_WRITE_SINCE_LAST_CHANGE",
    "cancel_command_line",
    "enter_command_mode",
    "enter_insert_mode",
    "exit_to_normal_mode",
    "submit_command_line",
]
