"""Exceptions raised by the CHIP-8 core.

Every error is terminal for the instruction that raised it and is surfaced
to whoever called ``Chip8.step()`` / ``Chip8.load_program()``.
"""


class Chip8Error(Exception):
    """Base class for all emulator errors."""


class InvalidOpcode(Chip8Error):
    def __init__(self, opcode, address):
        super().__init__("Unknown opcode %04X at 0x%03X" % (opcode, address))
        self.opcode = opcode
        self.address = address


class LoadError(Chip8Error):
    pass


class ProgramTooLarge(LoadError):
    def __init__(self, size, limit):
        super().__init__("Program is %d bytes, only %d bytes available" % (size, limit))
        self.size = size
        self.limit = limit


class StackOverflow(Chip8Error):
    pass


class StackUnderflow(Chip8Error):
    pass


class InvalidSpriteDigit(Chip8Error):
    def __init__(self, value):
        super().__init__("No font sprite for value 0x%02X" % value)
        self.value = value


class InvalidKey(Chip8Error):
    def __init__(self, key):
        super().__init__("Key out of range: %r" % (key,))
        self.key = key


class MemoryAccessError(Chip8Error):
    def __init__(self, address, length=1):
        super().__init__("Memory access out of bounds: 0x%X (+%d)" % (address, length))
        self.address = address
        self.length = length
