"""PySlow8, a CHIP-8 interpreter."""

__version__ = "0.2.0"

from .config import EmulatorConfig, Quirks
from .display import HEIGHT, WIDTH, Display
from .errors import (
    Chip8Error,
    InvalidKey,
    InvalidRegister,
    OutOfBounds,
    StackOverflow,
    StackUnderflow,
    UnknownInstruction,
)
from .instructions import Instruction, Op, decode, disassemble
from .interpreter import Chip8, MachineSnapshot
from .keypad import Keypad
from .loader import FONTSET, read_font, read_rom
from .memory import FONT_START_ADDRESS, PROGRAM_START_ADDRESS, Memory
from .registers import RegisterFile
from .timers import Timers

__all__ = [
    "Chip8",
    "Chip8Error",
    "Display",
    "EmulatorConfig",
    "FONTSET",
    "FONT_START_ADDRESS",
    "HEIGHT",
    "Instruction",
    "InvalidKey",
    "InvalidRegister",
    "Keypad",
    "MachineSnapshot",
    "Memory",
    "Op",
    "OutOfBounds",
    "PROGRAM_START_ADDRESS",
    "Quirks",
    "RegisterFile",
    "StackOverflow",
    "StackUnderflow",
    "Timers",
    "UnknownInstruction",
    "WIDTH",
    "decode",
    "disassemble",
    "read_font",
    "read_rom",
]
