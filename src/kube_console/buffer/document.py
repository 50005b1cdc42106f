"""The editable snapshot handed to an editor session."""

from __future__ import annotations

import os
from dataclasses import dataclass

from kube_console.workloads import Workload, manifest_filename, render_pod_manifest


@dataclass(frozen=True, slots=True)
class EditableDocument:
    """Textual snapshot of an external entity taken when editing begins.

    ``target_id`` is opaque and only routes a save back to its owner.
    """

    target_id: str
    display_name: str
    content: str

    @classmethod
    def for_workload(cls, workload: Workload) -> "EditableDocument":
        return cls(
            target_id=workload.id,
            display_name=manifest_filename(workload),
            content=render_pod_manifest(workload),
        )

    @property
    def stem(self) -> str:
        return os.path.splitext(self.display_name)[0]

    @property
    def line_count(self) -> int:
        return len(self.content.split("\n"))
