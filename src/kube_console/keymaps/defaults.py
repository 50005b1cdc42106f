"""Built-in keymaps that seed each mode with its bindings."""

from __future__ import annotations

from typing import Iterable

from kube_console.actions import command as command_actions
from kube_console.actions import core as core_actions
from kube_console.buffer import EditorMode

from .models import ActionRef, Binding
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="core.enter_insert",
        handler=core_actions.enter_insert_mode,
        description="Enter insert mode",
    ),
    ActionRef(
        id="core.exit_to_normal",
        handler=core_actions.exit_to_normal_mode,
        description="Return to normal mode",
    ),
    ActionRef(
        id="core.enter_command",
        handler=core_actions.enter_command_mode,
        description="Enter command-line mode",
    ),
    ActionRef(
        id="command.cancel_line",
        handler=core_actions.cancel_command_line,
        description="Abandon the command line",
    ),
    ActionRef(
        id="command.submit_line",
        handler=command_actions.submit_command_line,
        description="Evaluate the active command line",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(
        id="normal.enter_insert",
        mode=EditorMode.NORMAL,
        key="i",
        action_id="core.enter_insert",
        description="Enter insert mode",
    ),
    Binding(
        id="normal.enter_command",
        mode=EditorMode.NORMAL,
        key=":",
        action_id="core.enter_command",
        description="Enter command-line mode",
    ),
    Binding(
        id="insert.exit_escape",
        mode=EditorMode.INSERT,
        key="ESC",
        action_id="core.exit_to_normal",
        description="Leave insert mode",
    ),
    Binding(
        id="command.exit_escape",
        mode=EditorMode.COMMAND,
        key="ESC",
        action_id="command.cancel_line",
        description="Cancel command line",
    ),
    Binding(
        id="command.submit_enter",
        mode=EditorMode.COMMAND,
        key="ENTER",
        action_id="command.submit_line",
        description="Submit the command line",
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
) -> KeymapRegistry:
    """Register built-in actions and bindings for every mode."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)
    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding, replace=replace)
    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)
    return registry


def default_registry() -> KeymapRegistry:
    return load_default_keymaps(KeymapRegistry(logger_name="kube_console.keymaps"))


__all__ = [
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "default_registry",
    "load_default_keymaps",
]
