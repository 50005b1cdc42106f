"""Pod manifest rendering and the ``replicas:`` scan used on save."""

from __future__ import annotations

import re
from typing import Optional

from .models import Workload

POD_MANIFEST_TEMPLATE = "\n".join(
    (
        "apiVersion: v1",
        "kind: Pod",
        "metadata:",
        "  name: {name}",
        "  namespace: default",
        "spec:",
        "  containers:",
        "  - name: {name}",
        "    image: {image}",
        "    resources:",
        "      limits:",
        '        memory: "128Mi"',
        '        cpu: "500m"',
        "  replicas: {replicas}",
        "status:",
        "  phase: {status}",
    )
)

REPLICAS_PATTERN = re.compile(r"replicas:[ \t]*(\d+)")


def render_pod_manifest(workload: Workload) -> str:
    return POD_MANIFEST_TEMPLATE.format(
        name=workload.name,
        image=workload.image,
        replicas=workload.replicas,
        status=workload.status,
    )


def manifest_filename(workload: Workload) -> str:
    return f"{workload.name}.yaml"


def parse_replicas(content: str) -> Optional[int]:
    """Return the first ``replicas: <int>`` value in ``content``, if any.

    The key and its value must share a line. Malformed or missing fields
    yield ``None`` rather than an error.
    """

    match = REPLICAS_PATTERN.search(content)
    if match is None:
        return None
    return int(match.group(1))


__all__ = [
    "POD_MANIFEST_TEMPLATE",
    "REPLICAS_PATTERN",
    "manifest_filename",
    "parse_replicas",
    "render_pod_manifest",
]
