"""Mode manager: owns the active editor mode and its legal transitions."""

from __future__ import annotations

from typing import Dict, FrozenSet, Mapping, Optional, Type

from kube_console.buffer import EditorMode
from kube_console.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult

# Insert and Command are only reachable from, and only return to, Normal.
TRANSITIONS: Mapping[EditorMode, FrozenSet[EditorMode]] = {
    EditorMode.NORMAL: frozenset({EditorMode.INSERT, EditorMode.COMMAND}),
    EditorMode.INSERT: frozenset({EditorMode.NORMAL}),
    EditorMode.COMMAND: frozenset({EditorMode.NORMAL}),
}


class ModeManager:
    """Dispatches keys to the active mode and applies requested switches.

    Every completed switch is published on the context bus as
    ``mode.changed`` with ``{"previous": ..., "current": ...}``.
    """

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self._registered: Dict[EditorMode, Mode] = {}
        self._current: Optional[Mode] = None

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._current

    def register_mode(self, mode_cls: Type[Mode]) -> Mode:
        """Instantiate ``mode_cls``; the first mode registered starts active."""

        mode = mode_cls(self.context)
        if mode.name in self._registered:
            raise ValueError(f"Mode '{mode.name.value}' already registered")
        self._registered[mode.name] = mode
        if self._current is None:
            self._current = mode
            self.context.state.mode = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, target: EditorMode) -> None:
        if target not in self._registered:
            raise KeyError(f"Unknown mode '{target}'")
        current = self._current
        if current is not None:
            if current.name == target:
                return
            if target not in TRANSITIONS[current.name]:
                raise ValueError(
                    f"Cannot switch from {current.name.value} to {target.value} mode"
                )
            current.on_exit(target)

        previous = current.name if current is not None else None
        self._current = self._registered[target]
        self.context.state.mode = target
        self._current.on_enter(previous)
        self.context.bus.emit(
            "mode.changed",
            {"previous": previous, "current": target},
        )
        telemetry.record_event(
            "mode.switch",
            level="debug",
            data={"from": previous.value if previous else "-", "to": target.value},
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self._current
        if mode is None:
            raise RuntimeError("No mode registered")
        with telemetry.span(
            f"mode::{mode.name.value}",
            component="modes",
            metadata={"key": key.token},
        ):
            result = mode.handle_key(key)
        if result.switch_to is not None:
            self.switch_mode(result.switch_to)
        return result
