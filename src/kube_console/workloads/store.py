"""Collaborator interface for workload lookups and an in-memory store."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Protocol, Sequence

import yaml

from kube_console.runtime import telemetry

from .models import Workload

WorkloadListener = Callable[[Workload], None]


class WorkloadDirectory(Protocol):
    """What the console needs from the external data model."""

    def visible_workloads(self) -> Sequence[Workload]:
        """Workloads of the active context, in display order."""
        ...

    def lookup_visible_workload(self, name: str) -> Optional[Workload]:
        """Return the visible workload named exactly ``name``."""
        ...

    def update_workload_replicas(self, workload_id: str, replicas: int) -> None:
        """Fire-and-forget replica update for ``workload_id``."""
        ...


class WorkloadNotFoundError(KeyError):
    """Raised when an update targets a workload id the store does not hold."""

    def __init__(self, workload_id: str) -> None:
        super().__init__(workload_id)
        self.workload_id = workload_id

    def __str__(self) -> str:
        return f"Workload '{self.workload_id}' not found"


class InMemoryWorkloadStore:
    """Workloads for several cluster contexts, one of which is active."""

    def __init__(
        self,
        workloads: Iterable[Workload] = (),
        *,
        active_context: Optional[str] = None,
    ) -> None:
        self._workloads: List[Workload] = list(workloads)
        self._active_context = active_context
        self._listeners: List[WorkloadListener] = []
        self.logger = telemetry.get_logger("kube_console.workloads")

    @property
    def active_context(self) -> Optional[str]:
        return self._active_context

    def set_active_context(self, context_id: Optional[str]) -> None:
        self._active_context = context_id
        telemetry.record_event(
            "workloads.context", data={"context": context_id or "-"}
        )

    def all_workloads(self) -> Sequence[Workload]:
        return tuple(self._workloads)

    def visible_workloads(self) -> Sequence[Workload]:
        if self._active_context is None:
            return ()
        return tuple(
            w for w in self._workloads if w.context_id == self._active_context
        )

    def lookup_visible_workload(self, name: str) -> Optional[Workload]:
        for workload in self.visible_workloads():
            if workload.name == name:
                return workload
        return None

    def replace_context_workloads(
        self, context_id: str, items: Iterable[Workload]
    ) -> None:
        """Swap every workload of ``context_id`` for a freshly fetched list."""

        fresh = list(items)
        for item in fresh:
            if item.context_id != context_id:
                raise ValueError(
                    f"Workload '{item.name}' belongs to '{item.context_id}', not '{context_id}'"
                )
        kept = [w for w in self._workloads if w.context_id != context_id]
        self._workloads = kept + fresh

    def update_workload_replicas(self, workload_id: str, replicas: int) -> None:
        with telemetry.span(
            "workloads::update_replicas",
            logger_name="kube_console.workloads",
            component="workloads",
            metadata={"workload_id": workload_id, "replicas": replicas},
        ):
            for index, workload in enumerate(self._workloads):
                if workload.id == workload_id:
                    updated = replace(workload, replicas=replicas)
                    self._workloads[index] = updated
                    break
            else:
                raise WorkloadNotFoundError(workload_id)

        self.logger.info("workload %s scaled to %d replicas", updated.name, replicas)
        for listener in list(self._listeners):
            listener(updated)

    def subscribe(self, listener: WorkloadListener) -> None:
        self._listeners.append(listener)


@dataclass(slots=True)
class WorkloadInventory:
    """Contents of an inventory file."""

    workloads: List[Workload] = field(default_factory=list)
    active_context: Optional[str] = None

    def to_store(self, *, active_context: Optional[str] = None) -> InMemoryWorkloadStore:
        return InMemoryWorkloadStore(
            self.workloads, active_context=active_context or self.active_context
        )


def load_inventory(path: str | Path) -> WorkloadInventory:
    """Read workloads from a YAML file.

    The file is either a list of workload mappings or a mapping with
    ``workloads`` and an optional ``activeContext`` key.
    """

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if isinstance(data, list):
        raw_items, active = data, None
    elif isinstance(data, dict):
        raw_items = data.get("workloads") or []
        active = data.get("activeContext", data.get("active_context"))
    else:
        raise ValueError(f"Inventory '{path}' must be a mapping or a list")

    if not isinstance(raw_items, list):
        raise ValueError(f"Inventory '{path}' has a non-list 'workloads' entry")

    workloads = [Workload.from_mapping(item) for item in raw_items]
    telemetry.record_event(
        "workloads.inventory_loaded",
        data={"path": str(path), "count": len(workloads)},
    )
    return WorkloadInventory(
        workloads=workloads, active_context=str(active) if active else None
    )


SAMPLE_WORKLOADS: tuple[Workload, ...] = (
    Workload(
        id="local-nginx",
        name="nginx-web",
        image="nginx:1.25",
        context_id="local",
        status="Running",
        replicas=2,
        uptime="3d",
    ),
    Workload(
        id="local-redis",
        name="redis-cache",
        image="redis:7.2",
        context_id="local",
        status="Running",
        replicas=1,
        uptime="5h",
    ),
    Workload(
        id="local-worker",
        name="queue-worker",
        image="ghcr.io/acme/worker:0.9.1",
        context_id="local",
        status="CrashLoopBackOff",
        replicas=1,
        uptime="12m",
    ),
)


def sample_inventory() -> WorkloadInventory:
    return WorkloadInventory(workloads=list(SAMPLE_WORKLOADS), active_context="local")


__all__ = [
    "InMemoryWorkloadStore",
    "SAMPLE_WORKLOADS",
    "WorkloadDirectory",
    "WorkloadInventory",
    "WorkloadListener",
    "WorkloadNotFoundError",
    "load_inventory",
    "sample_inventory",
]
