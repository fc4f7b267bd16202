# Memory - 4096 bytes which hold the font set, the loaded ROM, and the call stack.
# Every access is bounds checked: anything outside 0x000-0xFFF raises
# MemoryAccessError instead of wrapping or clipping.

from .constants import (
    MEMORY_SIZE, FONT_ADDR, fontset, STACK_BASE_ADDR, STACK_END_ADDR,
)
from .errors import MemoryAccessError, StackOverflow, StackUnderflow


class Memory:

    def __init__(self):
        self.data = bytearray(MEMORY_SIZE)
        self.reset()

    def reset(self):
        self.data[:] = bytes(MEMORY_SIZE)
        self.data[FONT_ADDR:FONT_ADDR + len(fontset)] = bytes(fontset)

    def __len__(self):
        return len(self.data)

    def _check(self, addr, length=1):
        if addr < 0 or addr + length > MEMORY_SIZE:
            raise MemoryAccessError(addr, length)

    # ---- byte access ----
    def read_byte(self, addr):
        self._check(addr)
        return self.data[addr]

    def write_byte(self, addr, value):
        self._check(addr)
        self.data[addr] = value & 0xFF

    # ---- 16-bit big-endian access ----
    def read_word(self, addr):
        self._check(addr, 2)
        return (self.data[addr] << 8) | self.data[addr + 1]

    def write_word(self, addr, value):
        self._check(addr, 2)
        self.data[addr] = (value >> 8) & 0xFF
        self.data[addr + 1] = value & 0xFF

    # ---- block access ----
    def read_block(self, addr, length):
        self._check(addr, length)
        return bytes(self.data[addr:addr + length])

    def write_block(self, addr, values):
        values = bytes(values)
        self._check(addr, len(values))
        self.data[addr:addr + len(values)] = values


class Stack:
    """Return-address stack living inside :class:`Memory`.

    The stack grows downward from ``STACK_BASE_ADDR``. ``push`` writes at
    ``sp`` then moves it down one slot, ``pop`` moves it back up and reads.
    The stack pointer itself lives in the register file, so the stack is
    handed the registers rather than keeping its own copy.
    """

    def __init__(self, memory, registers):
        self.memory = memory
        self.registers = registers

    @property
    def depth(self):
        return (STACK_BASE_ADDR - self.registers.sp) // 2

    def push(self, value):
        sp = self.registers.sp
        if sp < STACK_END_ADDR:
            raise StackOverflow("Stack overflow pushing 0x%03X (SP=0x%03X)" % (value, sp))
        self.memory.write_word(sp, value & 0xFFFF)
        self.registers.sp = sp - 2

    def pop(self):
        sp = self.registers.sp
        if sp >= STACK_BASE_ADDR:
            raise StackUnderflow("Stack underflow (SP=0x%03X)" % sp)
        sp += 2
        self.registers.sp = sp
        return self.memory.read_word(sp)
