"""Mode-switching actions shared across modes."""

from __future__ import annotations

from kube_console.buffer import EditorMode
from kube_console.keymaps import ResolutionMatch
from kube_console.modes.base_mode import ModeContext, ModeResult


def enter_insert_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, message="enter_insert")


def exit_to_normal_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=EditorMode.NORMAL, message="exit_insert")


def enter_command_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(
        consumed=True, switch_to=EditorMode.COMMAND, message="enter_command"
    )


def cancel_command_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.state.command_line = ""
    context.state.status_message = ""
    return ModeResult(
        consumed=True, switch_to=EditorMode.NORMAL, message="command_cancel"
    )


__all__ = [
    "cancel_command_line",
    "enter_command_mode",
    "enter_insert_mode",
    "exit_to_normal_mode",
]
