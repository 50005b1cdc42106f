"""Runtime services shared by every layer of the console."""

from . import telemetry

__all__ = ["telemetry"]
