"""Mode manager and the three editor modes."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .command_mode import CommandMode
from .mode_manager import ModeManager

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "ModeManager",
    "NormalMode",
    "InsertMode",
    "CommandMode",
]
