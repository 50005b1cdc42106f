"""Insert mode: free-text editing of the whole buffer."""

from __future__ import annotations

from kube_console.buffer import EditorMode

from .base_mode import KeyInput, Mode, ModeResult


class InsertMode(Mode):
    name = EditorMode.INSERT

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        state = self.context.state
        token = key.token
        if token == "BACKSPACE":
            if not state.buffer:
                return ModeResult(consumed=True, status="insert_noop")
            return self.replace_buffer(state.buffer[:-1])
        if token == "ENTER":
            return self.replace_buffer(state.buffer + "\n")

        text = key.printable
        if text is None:
            return ModeResult(consumed=False, status="miss", message="unhandled")
        return self.replace_buffer(state.buffer + text)

    def replace_buffer(self, text: str) -> ModeResult:
        state = self.context.state
        state.buffer = text
        dirty = state.refresh_dirty(self.context.document.content)
        self.context.bus.emit("buffer.edit", {"length": len(text), "dirty": dirty})
        return ModeResult(consumed=True, status="insert_edit")
