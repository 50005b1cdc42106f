from __future__ import annotations

from typing import List, Tuple

import pytest

from kube_console.buffer import EditableDocument, EditorMode, EditorState
from kube_console.keymaps import ActionRef, Binding
from kube_console.keymaps.defaults import default_registry
from kube_console.modes import (
    CommandMode,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeResult,
    NormalMode,
)
from kube_console.modes.mode_manager import ModeManager


def make_document(content: str = "replicas: 1") -> EditableDocument:
    return EditableDocument(target_id="w-1", display_name="web.yaml", content=content)


def make_context(content: str = "replicas: 1") -> ModeContext:
    document = make_document(content)
    return ModeContext(
        state=EditorState.for_document(document),
        document=document,
        bus=ModeBus(),
        keymap=default_registry(),
    )


def make_manager(content: str = "replicas: 1") -> ModeManager:
    manager = ModeManager(make_context(content))
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)
    manager.register_mode(CommandMode)
    return manager


def test_normal_mode_uses_keymap_binding() -> None:
    mode = NormalMode(make_context())

    result = mode.handle_key(KeyInput(key="i"))

    assert result.switch_to == EditorMode.INSERT
    assert result.consumed is True


def test_insert_mode_escape_binding() -> None:
    mode = InsertMode(make_context())

    result = mode.handle_key(KeyInput(key="ESC"))

    assert result.switch_to == EditorMode.NORMAL
    assert result.consumed is True


def test_normal_mode_ignores_unbound_keys() -> None:
    context = make_context()
    mode = NormalMode(context)

    result = mode.handle_key(KeyInput(key="x", text="x"))

    assert result.consumed is False
    assert result.status == "miss"
    assert context.state.buffer == "replicas: 1"


def test_first_registered_mode_is_active() -> None:
    manager = make_manager()

    assert isinstance(manager.active_mode, NormalMode)
    assert manager.context.state.mode is EditorMode.NORMAL


def test_register_mode_twice_is_rejected() -> None:
    manager = make_manager()

    with pytest.raises(ValueError):
        manager.register_mode(InsertMode)


def test_switch_to_unknown_mode_raises() -> None:
    manager = ModeManager(make_context())
    manager.register_mode(NormalMode)

    with pytest.raises(KeyError):
        manager.switch_mode(EditorMode.COMMAND)


def test_manager_round_trip_through_insert() -> None:
    manager = make_manager()

    manager.handle_key(KeyInput(key="i"))
    assert manager.context.state.mode is EditorMode.INSERT

    manager.handle_key(KeyInput(key="escape"))
    assert manager.context.state.mode is EditorMode.NORMAL


def test_insert_mode_typing_marks_buffer_dirty() -> None:
    manager = make_manager("ab")
    edits: List[object] = []
    manager.context.bus.subscribe("buffer.edit", edits.append)

    manager.handle_key(KeyInput(key="i"))
    manager.handle_key(KeyInput(key="c", text="c"))

    state = manager.context.state
    assert state.buffer == "abc"
    assert state.dirty is True
    assert edits == [{"length": 3, "dirty": True}]


def test_insert_mode_backspace_restores_clean_state() -> None:
    manager = make_manager("ab")
    manager.handle_key(KeyInput(key="i"))
    manager.handle_key(KeyInput(key="c", text="c"))

    result = manager.handle_key(KeyInput(key="BACKSPACE"))

    assert result.status == "insert_edit"
    assert manager.context.state.buffer == "ab"
    assert manager.context.state.dirty is False


def test_insert_mode_backspace_on_empty_buffer_is_noop() -> None:
    manager = make_manager("")
    manager.handle_key(KeyInput(key="i"))

    result = manager.handle_key(KeyInput(key="BACKSPACE"))

    assert result.status == "insert_noop"
    assert manager.context.state.buffer == ""
    assert manager.context.state.dirty is False


def test_insert_mode_enter_adds_newline() -> None:
    manager = make_manager("a")
    manager.handle_key(KeyInput(key="i"))

    manager.handle_key(KeyInput(key="ENTER"))

    assert manager.context.state.buffer == "a\n"


def test_insert_mode_ignores_modified_keys() -> None:
    manager = make_manager("a")
    manager.handle_key(KeyInput(key="i"))

    result = manager.handle_key(KeyInput(key="s", text="s", modifiers=("CTRL",)))

    assert result.consumed is False
    assert manager.context.state.buffer == "a"


def test_command_mode_prefills_and_clears_prompt() -> None:
    manager = make_manager()
    events: List[Tuple[str, object]] = []
    manager.context.bus.subscribe("command.start", lambda p: events.append(("start", p)))
    manager.context.bus.subscribe("command.end", lambda p: events.append(("end", p)))

    manager.handle_key(KeyInput(key=":"))
    assert manager.context.state.mode is EditorMode.COMMAND
    assert manager.context.state.command_line == ":"

    manager.handle_key(KeyInput(key="ESC"))
    assert manager.context.state.mode is EditorMode.NORMAL
    assert manager.context.state.command_line == ""
    assert events == [("start", None), ("end", None)]


def test_command_mode_backspace_edits_then_aborts() -> None:
    manager = make_manager()
    manager.handle_key(KeyInput(key=":"))
    manager.handle_key(KeyInput(key="w", text="w"))

    manager.handle_key(KeyInput(key="BACKSPACE"))
    assert manager.context.state.command_line == ":"
    assert manager.context.state.mode is EditorMode.COMMAND

    result = manager.handle_key(KeyInput(key="BACKSPACE"))
    assert result.message == "command_abort"
    assert manager.context.state.command_line == ""
    assert manager.context.state.mode is EditorMode.NORMAL


def test_custom_binding_runs_registered_action() -> None:
    context = make_context()
    calls: List[str] = []

    def mark(ctx: ModeContext, match: object) -> ModeResult:
        del match
        calls.append(ctx.document.display_name)
        return ModeResult(consumed=True, status="marked")

    context.keymap.register_action(ActionRef(id="test.mark", handler=mark))
    context.keymap.register_binding(
        Binding(id="normal.mark", mode=EditorMode.NORMAL, key="m", action_id="test.mark")
    )
    mode = NormalMode(context)

    result = mode.handle_key(KeyInput(key="m", text="m"))

    assert result.status == "marked"
    assert calls == ["web.yaml"]


def test_action_without_result_is_treated_as_consumed() -> None:
    context = make_context()
    context.keymap.register_action(
        ActionRef(id="test.silent", handler=lambda ctx, match: None)
    )
    context.keymap.register_binding(
        Binding(id="normal.silent", mode=EditorMode.NORMAL, key="z", action_id="test.silent")
    )

    result = NormalMode(context).handle_key(KeyInput(key="z", text="z"))

    assert result.consumed is True
    assert result.switch_to is None


def test_insert_cannot_jump_straight_to_command() -> None:
    manager = make_manager()
    manager.handle_key(KeyInput(key="i"))

    with pytest.raises(ValueError):
        manager.switch_mode(EditorMode.COMMAND)

    assert manager.context.state.mode is EditorMode.INSERT


def test_mode_changes_are_published() -> None:
    manager = make_manager()
    changes: List[object] = []
    manager.context.bus.subscribe("mode.changed", changes.append)

    manager.handle_key(KeyInput(key=":"))
    manager.handle_key(KeyInput(key="ESC"))

    assert changes == [
        {"previous": EditorMode.NORMAL, "current": EditorMode.COMMAND},
        {"previous": EditorMode.COMMAND, "current": EditorMode.NORMAL},
    ]


def test_command_mode_exposes_no_extra_accessors() -> None:
    assert not hasattr(CommandMode, "current_command")
