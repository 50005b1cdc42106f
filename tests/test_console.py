from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from kube_console.buffer import EditableDocument, ExitReason
from kube_console.config import DEFAULT_BANNER, ConsoleConfig
from kube_console.console import (
    HELP_LINES,
    POD_TABLE_HEADER,
    CommandConsole,
    format_pod_row,
)
from kube_console.editor import key
from kube_console.workloads import (
    SAMPLE_WORKLOADS,
    InMemoryWorkloadStore,
    Workload,
    sample_inventory,
)


class FailingDirectory:
    """Directory whose updates always fail."""

    def __init__(self, workloads: Sequence[Workload]) -> None:
        self.workloads = tuple(workloads)
        self.attempts: List[Tuple[str, int]] = []

    def visible_workloads(self) -> Sequence[Workload]:
        return self.workloads

    def lookup_visible_workload(self, name: str) -> Optional[Workload]:
        return next((w for w in self.workloads if w.name == name), None)

    def update_workload_replicas(self, workload_id: str, replicas: int) -> None:
        self.attempts.append((workload_id, replicas))
        raise ConnectionError("cluster unreachable")


def make_console(store: Optional[InMemoryWorkloadStore] = None) -> CommandConsole:
    return CommandConsole(store or sample_inventory().to_store(), config=ConsoleConfig())


def press(console: CommandConsole, *names: str) -> None:
    for name in names:
        console.send_key(key(name))


def test_transcript_starts_with_banner() -> None:
    console = make_console()

    assert console.transcript.snapshot() == DEFAULT_BANNER
    assert console.editing is False


def test_echo_is_listed_in_help_but_not_a_command() -> None:
    console = make_console()

    console.submit("  echo hello   world ")

    assert console.transcript.snapshot()[-2:] == (
        "➜ ~ echo hello   world",
        "zsh: command not found: echo hello   world",
    )
    assert "  echo <msg>" in HELP_LINES


def test_blank_line_is_ignored() -> None:
    console = make_console()

    console.submit("   ")

    assert console.transcript.snapshot() == DEFAULT_BANNER


def test_clear_empties_transcript_without_echo() -> None:
    console = make_console()
    console.submit("help")

    console.submit(" clear ")

    assert console.transcript.snapshot() == ()


def test_help_lists_commands() -> None:
    console = make_console()

    console.submit("help")

    assert console.transcript.snapshot()[-len(HELP_LINES) - 1 :] == (
        "➜ ~ help",
        *HELP_LINES,
    )


def test_get_pods_renders_visible_workloads() -> None:
    console = make_console()

    console.submit("kubectl get pods")

    lines = console.transcript.snapshot()
    assert lines[-4] == POD_TABLE_HEADER
    assert lines[-3:] == tuple(format_pod_row(w) for w in SAMPLE_WORKLOADS)
    assert lines[-3] == "nginx-web       2/2     Running   0          3d"


def test_get_pods_without_active_context_shows_only_header() -> None:
    console = make_console(InMemoryWorkloadStore(SAMPLE_WORKLOADS))

    console.submit("kubectl get pods")

    assert console.transcript.snapshot()[-1] == POD_TABLE_HEADER


def test_get_pods_is_matched_exactly() -> None:
    console = make_console()

    console.submit("kubectl get pods -A")

    assert console.transcript.snapshot()[-1] == (
        "zsh: command not found: kubectl get pods -A"
    )


def test_unknown_command_is_reported() -> None:
    console = make_console()

    console.submit("ls -la")

    assert console.transcript.snapshot()[-2:] == (
        "➜ ~ ls -la",
        "zsh: command not found: ls -la",
    )


def test_edit_unknown_pod_reports_not_found() -> None:
    console = make_console()

    console.submit("kubectl edit pod ghost")

    assert console.transcript.snapshot()[-1] == 'Error: pods "ghost" not found'
    assert console.editing is False


def test_edit_with_extra_arguments_is_unknown() -> None:
    console = make_console()

    console.submit("kubectl edit pod nginx-web extra")

    assert console.transcript.snapshot()[-1] == (
        "zsh: command not found: kubectl edit pod nginx-web extra"
    )
    assert console.editing is False


def test_edit_opens_session_with_manifest() -> None:
    console = make_console()
    opened: List[object] = []
    console.bus.subscribe("editor.opened", opened.append)

    console.submit("kubectl edit pod nginx-web")

    assert console.editing is True
    document = console.session_document
    assert isinstance(document, EditableDocument)
    assert document.display_name == "nginx-web.yaml"
    assert document.target_id == "local-nginx"
    assert "  replicas: 2" in document.content
    assert opened == [document]
    assert console.transcript.snapshot()[-1] == "➜ ~ kubectl edit pod nginx-web"


def test_write_quit_scales_workload_and_reports_edit() -> None:
    store = sample_inventory().to_store()
    console = make_console(store)
    closed: List[object] = []
    console.bus.subscribe("editor.closed", closed.append)
    console.submit("kubectl edit pod nginx-web")
    press(console, "i")
    assert console.editor.state is not None
    console.editor.push_host_edit(
        console.editor.state.buffer.replace("replicas: 2", "replicas: 5")
    )

    press(console, "ESC", ":", "w", "q", "ENTER")

    assert console.editing is False
    assert console.transcript.snapshot()[-1] == "pod/nginx-web edited"
    assert store.lookup_visible_workload("nginx-web").replicas == 5
    assert closed == [ExitReason.WRITE_QUIT]

    console.submit("kubectl get pods")
    assert console.transcript.snapshot()[-3].startswith("nginx-web       5/5")


def test_plain_quit_leaves_transcript_untouched() -> None:
    store = sample_inventory().to_store()
    console = make_console(store)
    console.submit("kubectl edit pod redis-cache")
    before = console.transcript.snapshot()

    press(console, ":", "q", "ENTER")

    assert console.editing is False
    assert console.transcript.snapshot() == before
    assert store.lookup_visible_workload("redis-cache").replicas == 1


def test_write_without_replicas_field_skips_update() -> None:
    store = sample_inventory().to_store()
    console = make_console(store)
    console.submit("kubectl edit pod redis-cache")
    press(console, "i")
    console.editor.push_host_edit("kind: Pod")

    press(console, "ESC", ":", "x", "ENTER")

    assert console.transcript.snapshot()[-1] == "pod/redis-cache edited"
    assert store.lookup_visible_workload("redis-cache").replicas == 1


def test_failed_update_is_logged_and_session_continues(
    log_records: List[logging.LogRecord],
) -> None:
    directory = FailingDirectory(SAMPLE_WORKLOADS)
    console = CommandConsole(directory, config=ConsoleConfig())
    console.submit("kubectl edit pod queue-worker")

    press(console, ":", "w", "ENTER")

    assert directory.attempts == [("local-worker", 1)]
    assert console.editing is True
    failures = [
        r
        for r in log_records
        if r.levelno == logging.ERROR and "workload.update_failed" in r.getMessage()
    ]
    assert len(failures) == 1
    assert "cluster unreachable" in failures[0].getMessage()


def test_console_input_ignored_while_editing(
    log_records: List[logging.LogRecord],
) -> None:
    console = make_console()
    console.submit("kubectl edit pod nginx-web")
    before = console.transcript.snapshot()

    console.submit("help")

    assert console.transcript.snapshot() == before
    assert any(r.levelno == logging.WARNING for r in log_records)


def test_send_key_without_session_returns_none() -> None:
    console = make_console()

    assert console.send_key(key("i")) is None


def test_submit_uses_input_buffer_when_no_line_given() -> None:
    console = make_console()
    console.set_input("help")

    console.submit()

    assert console.input_buffer == ""
    assert console.transcript.snapshot()[-1] == HELP_LINES[-1]


def test_transcript_changes_are_broadcast() -> None:
    console = make_console()
    seen: List[object] = []
    console.bus.subscribe("transcript.changed", seen.append)

    console.submit("ls")

    assert seen[-1] == console.transcript.snapshot()
    assert len(seen) == 2


def test_custom_prompt_is_used_for_echo() -> None:
    config = ConsoleConfig(prompt_marker="$", working_directory="/srv")
    console = CommandConsole(sample_inventory().to_store(), config=config)

    console.submit("echo x")

    assert console.transcript.snapshot()[-2:] == (
        "$ /srv echo x",
        "zsh: command not found: echo x",
    )
