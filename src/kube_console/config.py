"""Console settings resolved from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from kube_console.runtime.telemetry import ENV_PREFIX

DEFAULT_BANNER: tuple[str, ...] = (
    "KubeNexus Shell v2.4.0",
    'Type "help" for commands.',
)
DEFAULT_PROMPT_MARKER = "➜"
DEFAULT_WORKING_DIRECTORY = "~"


@dataclass(frozen=True)
class ConsoleConfig:
    """Prompt, banner and inventory settings for one console view."""

    prompt_marker: str = DEFAULT_PROMPT_MARKER
    working_directory: str = DEFAULT_WORKING_DIRECTORY
    banner: tuple[str, ...] = DEFAULT_BANNER
    inventory_path: Optional[str] = None
    active_context: Optional[str] = None

    @property
    def prompt(self) -> str:
        return f"{self.prompt_marker} {self.working_directory}"

    def echo(self, line: str) -> str:
        """Render ``line`` the way the transcript records submitted input."""

        return f"{self.prompt} {line}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ConsoleConfig":
        env = os.environ if environ is None else environ

        def read(name: str) -> Optional[str]:
            value = env.get(f"{ENV_PREFIX}{name}")
            return value if value else None

        banner_raw = env.get(f"{ENV_PREFIX}BANNER")
        if banner_raw is None:
            banner = DEFAULT_BANNER
        else:
            banner = tuple(line for line in banner_raw.split("\n") if line)

        return cls(
            prompt_marker=read("PROMPT_MARKER") or DEFAULT_PROMPT_MARKER,
            working_directory=read("WORKDIR") or DEFAULT_WORKING_DIRECTORY,
            banner=banner,
            inventory_path=read("INVENTORY"),
            active_context=read("CONTEXT"),
        )


__all__ = ["ConsoleConfig", "DEFAULT_BANNER"]
