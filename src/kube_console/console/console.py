"""The simulated shell that owns the transcript and hosts editor sessions."""

from __future__ import annotations

from typing import Optional

from kube_console.buffer import EditableDocument, ExitReason
from kube_console.config import ConsoleConfig
from kube_console.editor import ModalEditor
from kube_console.modes import KeyInput, ModeBus, ModeResult
from kube_console.runtime import telemetry
from kube_console.workloads import WorkloadDirectory, parse_replicas

from .commands import run_command
from .transcript import Transcript

CLEAR_COMMAND = "clear"


class CommandConsole:
    """Line-oriented console; ``kubectl edit pod`` hands control to the editor.

    Host notifications go out on ``bus``: ``transcript.changed`` with the
    line tuple, ``editor.opened`` with the document, and ``editor.closed``
    with the :class:`ExitReason`.
    """

    def __init__(
        self,
        directory: WorkloadDirectory,
        *,
        config: ConsoleConfig | None = None,
        editor: ModalEditor | None = None,
    ) -> None:
        self.config = config or ConsoleConfig.from_env()
        self.directory = directory
        self.bus = ModeBus()
        self.transcript = Transcript(self.config.banner, on_change=self._on_transcript)
        self.input_buffer = ""
        self.editor = editor or ModalEditor()
        self.editor.on_save = self._handle_editor_save
        self.editor.on_exit = self._handle_editor_exit
        self.logger = telemetry.get_logger("kube_console.console")
        self._session: Optional[EditableDocument] = None

    @property
    def editing(self) -> bool:
        return self.editor.active

    @property
    def session_document(self) -> Optional[EditableDocument]:
        return self._session

    def set_input(self, text: str) -> None:
        self.input_buffer = text

    def submit(self, line: Optional[str] = None) -> None:
        raw = self.input_buffer if line is None else line
        self.input_buffer = ""
        if self.editing:
            self.logger.warning("ignoring console input while an editor session is open")
            return

        command = raw.strip()
        if not command:
            return

        with telemetry.span(
            "console::submit",
            logger_name="kube_console.console",
            component="console",
            metadata={"command": command},
        ):
            if command == CLEAR_COMMAND:
                self.transcript.clear()
                return
            self.transcript.append(self.config.echo(command))
            run_command(self, command)

    def send_key(self, key: KeyInput) -> Optional[ModeResult]:
        """Forward a keystroke to the active editor session, if any."""

        if not self.editing:
            return None
        return self.editor.handle_key(key)

    def open_editor(self, document: EditableDocument) -> None:
        self._session = document
        self.editor.open_session(document)
        self.bus.emit("editor.opened", document)

    def _handle_editor_save(self, content: str) -> None:
        document = self._session
        if document is None:
            return
        replicas = parse_replicas(content)
        if replicas is None:
            telemetry.record_event(
                "workload.update_skipped",
                data={"target": document.target_id, "reason": "no replicas field"},
            )
            return
        self._propagate_replicas(document.target_id, replicas)

    def _propagate_replicas(self, target_id: str, replicas: int) -> None:
        # Fire-and-forget: a failed update is logged, console state is untouched.
        try:
            self.directory.update_workload_replicas(target_id, replicas)
        except Exception as exc:
            telemetry.record_event(
                "workload.update_failed",
                level="error",
                data={"target": target_id, "replicas": replicas, "error": str(exc)},
                logger_name="kube_console.console",
            )
        else:
            telemetry.record_event(
                "workload.update_sent",
                data={"target": target_id, "replicas": replicas},
                logger_name="kube_console.console",
            )

    def _handle_editor_exit(self, reason: ExitReason) -> None:
        document = self._session
        self._session = None
        if reason is ExitReason.WRITE_QUIT and document is not None:
            self.transcript.append(f"pod/{document.stem} edited")
        self.bus.emit("editor.closed", reason)

    def _on_transcript(self, lines: tuple[str, ...]) -> None:
        self.bus.emit("transcript.changed", lines)


__all__ = ["CommandConsole"]
