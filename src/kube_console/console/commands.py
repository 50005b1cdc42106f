"""Console command grammar: ``help``, ``kubectl get pods``, ``kubectl edit pod``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from kube_console.buffer import EditableDocument
from kube_console.workloads import Workload

if TYPE_CHECKING:  # pragma: no cover
    from .console import CommandConsole

ConsoleHandler = Callable[["CommandConsole", str, List[str]], None]

HELP_LINES: tuple[str, ...] = (
    "Available commands:",
    "  kubectl get pods",
    "  kubectl edit pod <name>",
    "  clear",
    "  echo <msg>",
)
POD_TABLE_HEADER = "NAME            READY   STATUS    RESTARTS   AGE"
EDIT_POD_PREFIX = ("kubectl", "edit", "pod")


def format_pod_row(workload: Workload) -> str:
    ready = f"{workload.replicas}/{workload.replicas}"
    return f"{workload.name:<15} {ready}     {workload.status:<9} 0          {workload.uptime}"


def pod_not_found(name: str) -> str:
    return f'Error: pods "{name}" not found'


def command_not_found(command: str) -> str:
    return f"zsh: command not found: {command}"


def run_command(console: "CommandConsole", command: str) -> None:
    """Dispatch a trimmed, non-empty line other than ``clear``."""

    args = command.split()
    handler = _EXACT_HANDLERS.get(command) or _match_shape(args)
    if handler is None:
        handler = _unknown_command
    handler(console, command, args)


def _match_shape(args: List[str]) -> Optional[ConsoleHandler]:
    if len(args) == 4 and tuple(args[:3]) == EDIT_POD_PREFIX:
        return _handle_edit_pod
    return None


def _handle_help(console: "CommandConsole", command: str, args: List[str]) -> None:
    del command, args
    console.transcript.extend(HELP_LINES)


def _handle_get_pods(console: "CommandConsole", command: str, args: List[str]) -> None:
    del command, args
    rows = [format_pod_row(w) for w in console.directory.visible_workloads()]
    console.transcript.extend([POD_TABLE_HEADER, *rows])


def _handle_edit_pod(console: "CommandConsole", command: str, args: List[str]) -> None:
    del command
    name = args[3]
    workload = console.directory.lookup_visible_workload(name)
    if workload is None:
        console.transcript.append(pod_not_found(name))
        return
    console.open_editor(EditableDocument.for_workload(workload))


def _unknown_command(console: "CommandConsole", command: str, args: List[str]) -> None:
    del args
    console.transcript.append(command_not_found(command))


_EXACT_HANDLERS: Dict[str, ConsoleHandler] = {
    "help": _handle_help,
    "kubectl get pods": _handle_get_pods,
}


__all__ = [
    "HELP_LINES",
    "POD_TABLE_HEADER",
    "command_not_found",
    "format_pod_row",
    "pod_not_found",
    "run_command",
]
