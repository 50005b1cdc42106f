"""Modal editor sessions hosted by the console.

A :class:`ModalEditor` runs at most one session at a time. A session starts
from an :class:`~kube_console.buffer.EditableDocument`, feeds keystrokes
through the Normal/Insert/Command modes, and ends when a ``:q``, ``:q!``,
``:wq`` or ``:x`` command asks it to. The host learns about saves and exits
through the ``on_save`` and ``on_exit`` callbacks; rendering code subscribes
to state snapshots instead of owning the state.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Mapping, Optional, cast

from kube_console.buffer import EditableDocument, EditorMode, EditorState, ExitReason
from kube_console.keymaps import KeymapRegistry
from kube_console.keymaps.defaults import default_registry
from kube_console.modes import (
    CommandMode,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeManager,
    ModeResult,
    NormalMode,
)
from kube_console.runtime import telemetry

SaveCallback = Callable[[str], None]
ExitCallback = Callable[[ExitReason], None]
StateListener = Callable[[Optional[EditorState]], None]


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


class EditorSessionError(RuntimeError):
    """Raised when the host drives the editor outside a valid session."""


class ModalEditor:
    """Three-mode editor state machine with a ``:`` command language."""

    def __init__(
        self,
        *,
        on_save: SaveCallback | None = None,
        on_exit: ExitCallback | None = None,
        keymap_registry: KeymapRegistry | None = None,
    ) -> None:
        self.on_save: SaveCallback = on_save or _noop
        self.on_exit: ExitCallback = on_exit or _noop
        self.keymap_registry = keymap_registry or default_registry()
        self.logger = telemetry.get_logger("kube_console.editor")
        self._manager: Optional[ModeManager] = None
        self._pending_exit: Optional[ExitReason] = None
        self._listeners: List[StateListener] = []

    @property
    def active(self) -> bool:
        return self._manager is not None

    @property
    def state(self) -> Optional[EditorState]:
        if self._manager is None:
            return None
        return self._manager.context.state

    @property
    def document(self) -> Optional[EditableDocument]:
        if self._manager is None:
            return None
        return self._manager.context.document

    @property
    def command_history(self) -> tuple[str, ...]:
        if self._manager is None:
            return ()
        history = self._manager.context.extras.get("command_history", [])
        return tuple(cast(Iterable[str], history))

    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def open_session(self, document: EditableDocument) -> EditorState:
        if self._manager is not None:
            raise EditorSessionError("An editor session is already active")

        state = EditorState.for_document(document)
        bus = ModeBus()
        context = ModeContext(
            state=state,
            document=document,
            bus=bus,
            keymap=self.keymap_registry,
        )
        manager = ModeManager(context)
        manager.register_mode(NormalMode)
        manager.register_mode(InsertMode)
        manager.register_mode(CommandMode)
        bus.subscribe("command.write", self._on_write)
        bus.subscribe("command.quit", self._on_quit)

        self._manager = manager
        self._pending_exit = None
        telemetry.record_event(
            "editor.open",
            data={"target": document.target_id, "file": document.display_name},
        )
        self._notify(state)
        return state

    def handle_key(self, key: KeyInput) -> ModeResult:
        manager = self._require_session()
        result = manager.handle_key(key)
        if self._pending_exit is not None:
            self._close_session(self._pending_exit)
        else:
            self._notify(manager.context.state)
        return result

    def push_host_edit(self, text: str) -> EditorState:
        """Replace the whole buffer with text edited by the host widget."""

        manager = self._require_session()
        mode = manager.active_mode
        if not isinstance(mode, InsertMode):
            raise EditorSessionError("Buffer edits are only accepted in insert mode")
        mode.replace_buffer(text)
        self._notify(manager.context.state)
        return manager.context.state

    def _require_session(self) -> ModeManager:
        if self._manager is None:
            raise EditorSessionError("No editor session is active")
        return self._manager

    def _on_write(self, payload: object) -> None:
        content = str(cast(Mapping[str, object], payload)["content"])
        with telemetry.span(
            "editor::save",
            logger_name="kube_console.editor",
            component="editor",
            metadata={"length": len(content)},
        ):
            self.on_save(content)

    def _on_quit(self, payload: object) -> None:
        reason = cast(Mapping[str, object], payload)["reason"]
        self._pending_exit = ExitReason(reason)

    def _close_session(self, reason: ExitReason) -> None:
        manager = self._manager
        self._manager = None
        self._pending_exit = None
        document = manager.context.document if manager else None
        telemetry.record_event(
            "editor.exit",
            data={
                "reason": reason.value,
                "file": document.display_name if document else "-",
            },
        )
        self._notify(None)
        self.on_exit(reason)

    def _notify(self, state: Optional[EditorState]) -> None:
        snapshot = state.snapshot() if state is not None else None
        for listener in list(self._listeners):
            listener(snapshot)


def key(name: str, *, modifiers: Iterable[str] = ()) -> KeyInput:
    """Build a ``KeyInput`` for a named key or a single typed character."""

    mods = tuple(str(mod).upper() for mod in modifiers)
    if len(name) == 1:
        return KeyInput(key=name, text=name, modifiers=mods)
    return KeyInput(key=name, modifiers=mods)


__all__ = [
    "EditorMode",
    "EditorSessionError",
    "ModalEditor",
    "key",
]
