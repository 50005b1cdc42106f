from __future__ import annotations

from pathlib import Path

from kube_console.adapters.textual.app import (
    KubeConsoleApp,
    _parse_args,
    create_console,
    render_editor_buffer,
    render_editor_status,
)
from kube_console.buffer import EditableDocument, EditorMode, EditorState
from kube_console.config import ConsoleConfig


def make_document() -> EditableDocument:
    return EditableDocument(target_id="w-1", display_name="web.yaml", content="a\nb")


def test_render_editor_buffer_numbers_lines() -> None:
    state = EditorState(buffer="\n".join(f"line {n}" for n in range(1, 11)))

    rendered = render_editor_buffer(state).plain.split("\n")

    assert rendered[0] == " 1 line 1"
    assert rendered[-1] == "10 line 10"


def test_render_editor_status_shows_mode_dirty_and_message() -> None:
    state = EditorState(
        mode=EditorMode.INSERT, buffer="x", status_message="hello", dirty=True
    )

    status = render_editor_status(state, make_document())

    assert status == " INSERT   web.yaml  [+]  hello"


def test_update_editor_with_partial_session_clears_command_line() -> None:
    app = KubeConsoleApp(config=ConsoleConfig())
    app._show_command(":wq")

    app._update_editor(EditorState(mode=EditorMode.COMMAND), None)

    assert app._ui_state.editing is False
    assert app._ui_state.command_text == ""


def test_update_editor_closed_session_clears_command_line() -> None:
    app = KubeConsoleApp(config=ConsoleConfig())
    app._show_command(":q")

    app._update_editor(None, None)

    assert app._ui_state.command_text == ""


def test_create_console_reads_inventory_file(tmp_path: Path) -> None:
    path = tmp_path / "inventory.yaml"
    path.write_text(
        "activeContext: edge\n"
        "workloads:\n"
        "  - {id: e-1, name: gateway, image: envoy:1.29, contextId: edge}\n",
        encoding="utf-8",
    )

    console = create_console(ConsoleConfig(inventory_path=str(path)))

    assert [w.name for w in console.directory.visible_workloads()] == ["gateway"]


def test_create_console_context_override_hides_sample_workloads() -> None:
    console = create_console(ConsoleConfig(active_context="staging"))

    assert console.directory.visible_workloads() == ()


def test_parse_args_reads_options() -> None:
    args = _parse_args(["--inventory", "inv.yaml", "--context", "dev", "--log-file", "x.log"])

    assert args.inventory == "inv.yaml"
    assert args.context == "dev"
    assert args.log_file == "x.log"
