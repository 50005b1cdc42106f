"""Workload records as seen by the console."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

WORKLOAD_STATUSES: tuple[str, ...] = ("Running", "Pending", "Failed", "CrashLoopBackOff")


@dataclass(frozen=True, slots=True)
class Workload:
    """Snapshot of a single pod-like workload in one cluster context."""

    id: str
    name: str
    image: str
    context_id: str
    status: str = "Running"
    replicas: int = 1
    uptime: str = "0s"

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("workload id cannot be empty")
        if not self.name:
            raise ValueError("workload name cannot be empty")
        if self.status not in WORKLOAD_STATUSES:
            raise ValueError(
                f"Unknown workload status '{self.status}' for '{self.name}'"
            )
        if isinstance(self.replicas, bool) or not isinstance(self.replicas, int):
            raise TypeError("replicas must be an integer")
        if self.replicas < 0:
            raise ValueError("replicas cannot be negative")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Workload":
        context_id = data.get("context_id", data.get("contextId"))
        if context_id is None:
            raise ValueError(f"Workload '{data.get('name')}' is missing a context id")
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            image=str(data.get("image", "")),
            context_id=str(context_id),
            status=str(data.get("status", "Running")),
            replicas=int(data.get("replicas", 1)),
            uptime=str(data.get("uptime", "0s")),
        )


__all__ = ["Workload", "WORKLOAD_STATUSES"]
