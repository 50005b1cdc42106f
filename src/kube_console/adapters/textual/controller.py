"""Textual adapter that wires console and editor events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Sequence

from kube_console.buffer import EditableDocument, EditorState, ExitReason
from kube_console.console import CommandConsole
from kube_console.modes import KeyInput, ModeResult


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class ConsoleUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_transcript: Callable[[Sequence[str]], None]
    update_editor: Callable[
        [Optional[EditorState], Optional[EditableDocument]], None
    ] = _noop
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualConsoleAdapter:
    """Bridges a CommandConsole and its editor to a Textual-friendly surface."""

    def __init__(self, console: CommandConsole, hooks: ConsoleUIHooks) -> None:
        self.console = console
        self.hooks = hooks
        self._subscribe_events()
        self.hooks.update_transcript(console.transcript.snapshot())

    def submit_line(self, line: str) -> None:
        self._log_state("submit ->", line=line)
        self.console.submit(line)

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> Optional[ModeResult]:
        """Translate a Textual key event into a KeyInput for the editor."""

        if not self.console.editing:
            return None
        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.console.send_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        if result is not None:
            self._log_state(
                "result <-",
                consumed=result.consumed,
                status=result.status,
                message=result.message,
                switch_to=result.switch_to.value if result.switch_to else None,
            )
        return result

    def _subscribe_events(self) -> None:
        bus = self.console.bus
        bus.subscribe("transcript.changed", self._on_transcript)
        bus.subscribe("editor.opened", self._on_editor_opened)
        bus.subscribe("editor.closed", self._on_editor_closed)
        self.console.editor.subscribe(self._on_editor_state)

    def _on_transcript(self, payload: object) -> None:
        lines = tuple(payload) if isinstance(payload, tuple) else ()
        self.hooks.update_transcript(lines)

    def _on_editor_opened(self, payload: object) -> None:
        if isinstance(payload, EditableDocument):
            self._log_state("event ->", event="editor.opened", file=payload.display_name)
            self.hooks.update_status(f"editing {payload.display_name}")
            self.hooks.update_editor(self.console.editor.state, payload)

    def _on_editor_closed(self, payload: object) -> None:
        reason = payload.value if isinstance(payload, ExitReason) else str(payload)
        self._log_state("event ->", event="editor.closed", reason=reason)
        self.hooks.update_status(f"editor closed: {reason}")
        self.hooks.update_editor(None, None)

    def _on_editor_state(self, state: Optional[EditorState]) -> None:
        if state is None:
            return
        self.hooks.update_editor(state, self.console.editor.document)
        if state.status_message:
            self.hooks.update_status(state.status_message)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        state = self.console.editor.state
        return {
            "editing": self.console.editing,
            "mode": state.mode.value if state else "-",
            "command": state.command_line if state else "",
            "dirty": state.dirty if state else False,
            "lines": len(self.console.transcript),
        }


__all__ = ["ConsoleUIHooks", "TextualConsoleAdapter"]
