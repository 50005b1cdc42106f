"""Simulated cluster console with an embedded modal editor."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "console",
    "editor",
    "keymaps",
    "modes",
    "runtime",
    "workloads",
]

__version__ = "0.1.0"
