"""Textual host for the console.

``KubeConsoleApp`` lives in :mod:`kube_console.adapters.textual.app` so the
adapter can be used without importing the full application.
"""

from .controller import ConsoleUIHooks, TextualConsoleAdapter

__all__ = ["ConsoleUIHooks", "TextualConsoleAdapter"]
