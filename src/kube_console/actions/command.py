"""Actions that evaluate the editor's ``:`` command line."""

from __future__ import annotations

from typing import Callable, Dict, List, cast

from kube_console.buffer import EditorMode, ExitReason
from kube_console.modes.base_mode import ModeContext, ModeResult

CommandHandler = Callable[[ModeContext, str], ModeResult]

NO_WRITE_SINCE_LAST_CHANGE = "E37: No write since last change (add ! to override)"
NOT_AN_EDITOR_COMMAND = "E492: Not an editor command: {command}"


def _command_history(context: ModeContext) -> List[str]:
    return cast(List[str], context.extras.setdefault("command_history", []))


def submit_command_line(context: ModeContext, match) -> ModeResult:
    del match
    state = context.state
    raw = state.command_line
    if raw.startswith(":"):
        raw = raw[1:]
    command = raw.strip()
    state.command_line = ""
    _command_history(context).append(command)

    handler = _COMMAND_HANDLERS.get(command, _unknown_command)
    return handler(context, command)


def _unknown_command(context: ModeContext, command: str) -> ModeResult:
    message = NOT_AN_EDITOR_COMMAND.format(command=command)
    context.state.status_message = message
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_error",
        message=message,
    )


def _handle_write(context: ModeContext, command: str) -> ModeResult:
    del command
    _emit_write(context)
    message = f'"{context.document.display_name}" written'
    context.state.status_message = message
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_write",
        message=message,
    )


def _handle_write_quit(context: ModeContext, command: str) -> ModeResult:
    _emit_write(context)
    _emit_quit(context, ExitReason.WRITE_QUIT)
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_wq",
        message=command,
    )


def _handle_quit(context: ModeContext, command: str) -> ModeResult:
    if context.state.dirty:
        context.state.status_message = NO_WRITE_SINCE_LAST_CHANGE
        return ModeResult(
            consumed=True,
            switch_to=EditorMode.NORMAL,
            status="command_quit_blocked",
            message=NO_WRITE_SINCE_LAST_CHANGE,
        )
    _emit_quit(context, ExitReason.QUIT)
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_quit",
        message=command,
    )


def _handle_force_quit(context: ModeContext, command: str) -> ModeResult:
    _emit_quit(context, ExitReason.FORCE_QUIT)
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_quit_force",
        message=command,
    )


def _emit_write(context: ModeContext) -> None:
    payload = {
        "target_id": context.document.target_id,
        "content": context.state.buffer,
    }
    context.bus.emit("command.write", payload)


def _emit_quit(context: ModeContext, reason: ExitReason) -> None:
    context.bus.emit("command.quit", {"reason": reason})


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "w": _handle_write,
    "wq": _handle_write_quit,
    "x": _handle_write_quit,
    "q": _handle_quit,
    "q!": _handle_force_quit,
}


__all__ = [
    "NOT_AN_EDITOR_COMMAND",
    "NO_WRITE_SINCE_LAST_CHANGE",
    "submit_command_line",
]
