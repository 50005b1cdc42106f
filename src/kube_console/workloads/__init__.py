"""Workload model, manifest rendering, and the lookup/update collaborator."""

from .manifest import (
    POD_MANIFEST_TEMPLATE,
    manifest_filename,
    parse_replicas,
    render_pod_manifest,
)
from .models import WORKLOAD_STATUSES, Workload
from .store import (
    SAMPLE_WORKLOADS,
    InMemoryWorkloadStore,
    WorkloadDirectory,
    WorkloadInventory,
    WorkloadNotFoundError,
    load_inventory,
    sample_inventory,
)

__all__ = [
    "InMemoryWorkloadStore",
    "POD_MANIFEST_TEMPLATE",
    "SAMPLE_WORKLOADS",
    "WORKLOAD_STATUSES",
    "Workload",
    "WorkloadDirectory",
    "WorkloadInventory",
    "WorkloadNotFoundError",
    "load_inventory",
    "manifest_filename",
    "parse_replicas",
    "render_pod_manifest",
    "sample_inventory",
]
