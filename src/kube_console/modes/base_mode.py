"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from kube_console.buffer import EditableDocument, EditorMode, EditorState
from kube_console.keymaps import KeymapRegistry, ResolutionMatch, normalize_key
from kube_console.runtime import telemetry

_TEXT_BLOCKING_MODIFIERS = frozenset({"CTRL", "ALT", "META"})


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def token(self) -> str:
        key = normalize_key(self.key)
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{key}"
        return key

    @property
    def printable(self) -> Optional[str]:
        """Single printable character carried by this key, if any."""

        if _TEXT_BLOCKING_MODIFIERS.intersection(m.upper() for m in self.modifiers):
            return None
        text = self.text
        if text is None and len(self.key) == 1:
            text = self.key
        if text and len(text) == 1 and text.isprintable():
            return text
        return None


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[EditorMode] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    state: EditorState
    document: EditableDocument
    bus: "ModeBus"
    keymap: KeymapRegistry
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from.

    Keys bound in the keymap run their action; everything else goes to
    ``handle_unbound``, which ignores the key unless a subclass overrides it.
    """

    name: EditorMode = EditorMode.NORMAL

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self.logger = telemetry.get_logger(f"kube_console.modes.{self.name.value}")

    def on_enter(
        self, previous: Optional[EditorMode]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[EditorMode]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(self, key: KeyInput) -> ModeResult:
        match = self.context.keymap.resolve(self.name, key.token)
        if match is not None:
            return self._execute_match(match)
        return self.handle_unbound(key)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="miss", message="unhandled")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)
