"""Command-line mode with inline editing of the ``:`` prompt."""

from __future__ import annotations

from typing import Optional

from kube_console.buffer import EditorMode

from .base_mode import KeyInput, Mode, ModeResult

COMMAND_PREFIX = ":"


class CommandMode(Mode):
    name = EditorMode.COMMAND

    def on_enter(self, previous: Optional[EditorMode]) -> None:
        del previous
        self.context.state.command_line = COMMAND_PREFIX
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: Optional[EditorMode]) -> None:
        del next_mode
        self.context.state.command_line = ""
        self.context.bus.emit("command.end", None)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        state = self.context.state
        if key.token == "BACKSPACE":
            if len(state.command_line) > 1:
                state.command_line = state.command_line[:-1]
                return ModeResult(consumed=True, status="editing")
            state.command_line = ""
            return ModeResult(
                consumed=True, switch_to=EditorMode.NORMAL, message="command_abort"
            )

        text = key.printable
        if text is None:
            return ModeResult(consumed=False, status="miss", message="unhandled")
        state.command_line += text
        return ModeResult(consumed=True, status="editing")
