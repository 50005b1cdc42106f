"""Executable Textual app that hosts the console and its editor."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from rich.text import Text

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import VerticalScroll
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use kube_console.adapters.textual.app"
    ) from exc

from kube_console.buffer import EditableDocument, EditorMode, EditorState
from kube_console.config import ConsoleConfig
from kube_console.console import CommandConsole
from kube_console.runtime import telemetry
from kube_console.runtime.telemetry import ENV_PREFIX
from kube_console.workloads import (
    InMemoryWorkloadStore,
    Workload,
    load_inventory,
    sample_inventory,
)

from .controller import ConsoleUIHooks, TextualConsoleAdapter


def create_console(config: ConsoleConfig) -> CommandConsole:
    """Build a console backed by the configured (or sample) inventory."""

    if config.inventory_path:
        inventory = load_inventory(config.inventory_path)
    else:
        inventory = sample_inventory()
    store = inventory.to_store(active_context=config.active_context)
    return CommandConsole(store, config=config)


def render_editor_buffer(state: EditorState) -> Text:
    lines = state.buffer.split("\n")
    width = len(str(len(lines)))
    numbered = [f"{index:>{width}} {line}" for index, line in enumerate(lines, start=1)]
    return Text("\n".join(numbered))


def render_editor_status(state: EditorState, document: EditableDocument) -> str:
    parts = [f" {state.mode.label} ", document.display_name]
    if state.dirty:
        parts.append("[+]")
    if state.status_message:
        parts.append(state.status_message)
    return "  ".join(parts)


@dataclass
class UIState:
    transcript_text: str = ""
    status_text: str = ""
    command_text: str = ""
    editing: bool = False


class KubeConsoleApp(App[None]):
    """Console drawer with an embedded modal editor."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#transcript-area {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#editor-view {
		height: 1fr;
		border: round $warning;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, config: ConsoleConfig | None = None) -> None:
        super().__init__()
        self.config = config or ConsoleConfig.from_env()
        self._ui_state = UIState()
        self.shell: CommandConsole | None = None
        self.adapter: TextualConsoleAdapter | None = None
        self._transcript_area: VerticalScroll | None = None
        self._transcript_widget: Static | None = None
        self._editor_widget: Static | None = None
        self._status_widget: Static | None = None
        self._command_widget: Static | None = None
        self._input_widget: Input | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._transcript_area = VerticalScroll(id="transcript-area")
        with self._transcript_area:
            self._transcript_widget = Static("", id="transcript")
            yield self._transcript_widget
        self._input_widget = Input(placeholder=self.config.prompt, id="command-input")
        yield self._input_widget
        self._editor_widget = Static("", id="editor-view")
        self._editor_widget.display = False
        yield self._editor_widget
        self._status_widget = Static("", id="status-line")
        self._command_widget = Static("", id="command-line")
        yield self._status_widget
        yield self._command_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.shell = create_console(self.config)
        store = self.shell.directory
        if isinstance(store, InMemoryWorkloadStore):
            store.subscribe(self._on_workload_updated)
        hooks = ConsoleUIHooks(
            update_transcript=self._update_transcript,
            update_editor=self._update_editor,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualConsoleAdapter(self.shell, hooks)
        if self._input_widget:
            self._input_widget.focus()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.adapter:
            return
        self.adapter.submit_line(event.value)
        event.input.value = ""

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or not self._ui_state.editing:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _update_transcript(self, lines: Sequence[str]) -> None:
        self._ui_state.transcript_text = "\n".join(lines)
        if self._transcript_widget:
            self._transcript_widget.update(Text(self._ui_state.transcript_text))
        if self._transcript_area:
            self._transcript_area.scroll_end(animate=False)

    def _update_editor(
        self, state: Optional[EditorState], document: Optional[EditableDocument]
    ) -> None:
        editing = state is not None and document is not None
        if editing != self._ui_state.editing:
            self._toggle_editor(editing)
        if state is None or document is None:
            self._show_command("")
            return
        if self._editor_widget:
            self._editor_widget.update(render_editor_buffer(state))
        self._update_status(render_editor_status(state, document))
        self._show_command(state.command_line if state.mode is EditorMode.COMMAND else "")

    def _toggle_editor(self, editing: bool) -> None:
        self._ui_state.editing = editing
        if self._editor_widget:
            self._editor_widget.display = editing
        if self._transcript_area:
            self._transcript_area.display = not editing
        if self._input_widget:
            self._input_widget.disabled = editing
            self._input_widget.display = not editing
            if not editing:
                self._input_widget.focus()
        if editing:
            self.set_focus(None)

    def _update_status(self, status: str) -> None:
        self._ui_state.status_text = status
        if self._status_widget:
            self._status_widget.update(Text(status))

    def _show_command(self, command: str) -> None:
        self._ui_state.command_text = command
        if self._command_widget:
            self._command_widget.update(Text(command))

    def _on_workload_updated(self, workload: Workload) -> None:
        self._update_status(f"{workload.name}: {workload.replicas} replicas")

    def _log_line(self, line: str) -> None:
        telemetry.get_logger("kube_console.adapters.textual").debug(line)

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        modifiers = []
        ctrl = bool(getattr(event, "ctrl", False))
        alt = bool(getattr(event, "alt", False) or getattr(event, "meta", False))
        if ctrl:
            modifiers.append("CTRL")
        if alt:
            modifiers.append("ALT")
        key = event.key
        if key in {"ctrl+c", "ctrl+q"}:
            return None
        if key == "escape":
            return ("ESC", None, tuple(modifiers))
        if key in {"enter", "return"}:
            return ("ENTER", None, tuple(modifiers))
        if key == "backspace":
            return ("BACKSPACE", None, tuple(modifiers))
        if event.character and event.is_printable:
            return (event.character, event.character, tuple(modifiers))
        return (key.upper(), None, tuple(modifiers))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the cluster console.")
    parser.add_argument(
        "--inventory",
        default=os.environ.get(f"{ENV_PREFIX}INVENTORY"),
        help="YAML file listing workloads (default: built-in sample set)",
    )
    parser.add_argument(
        "--context",
        default=os.environ.get(f"{ENV_PREFIX}CONTEXT"),
        help="Cluster context whose workloads are visible",
    )
    parser.add_argument(
        "--log-file",
        default=os.environ.get(f"{ENV_PREFIX}LOG_FILE", ""),
        help="Write console logs to this file",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(
        config=telemetry.TelemetryConfig(console=False, log_file=args.log_file)
    )
    config = replace(
        ConsoleConfig.from_env(),
        inventory_path=args.inventory,
        active_context=args.context,
    )
    KubeConsoleApp(config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
