"""CHIP-8 virtual machine: an execution core plus a pyglet host."""

__version__ = "0.1.0"

from .cpu import Chip8, State
from .errors import (
    Chip8Error, InvalidKey, InvalidOpcode, InvalidSpriteDigit, LoadError,
    MemoryAccessError, ProgramTooLarge, StackOverflow, StackUnderflow,
)
from .ports import Keypad, RandomByteSource, Timers

__all__ = [
    "Chip8", "State", "Timers", "Keypad", "RandomByteSource",
    "Chip8Error", "InvalidOpcode", "LoadError", "ProgramTooLarge",
    "StackOverflow", "StackUnderflow", "InvalidSpriteDigit", "InvalidKey",
    "MemoryAccessError",
]
