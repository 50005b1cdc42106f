"""Simulated shell: transcript, command grammar, and the console itself."""

from .commands import (
    HELP_LINES,
    POD_TABLE_HEADER,
    command_not_found,
    format_pod_row,
    pod_not_found,
)
from .console import CommandConsole
from .transcript import Transcript

__all__ = [
    "CommandConsole",
    "HELP_LINES",
    "POD_TABLE_HEADER",
    "Transcript",
    "command_not_found",
    "format_pod_row",
    "pod_not_found",
]
