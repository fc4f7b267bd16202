# CHIP8 Virtual Machine Steps:
# Input - the keypad port holds key states; FX0A parks the CPU until the host
#         reports a key press through notify_key_pressed().
# Output - 64x32 framebuffer (cells are lit when nonzero).
# CPU - Cowgods CHIP8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM#0.0
# Memory - 4096 bytes which include the fonts, the loaded ROM and the call stack.
#----------------------------------------------------------------------------------------------
# The host calls step() once per CPU cycle. Timers are never decremented
# here; the host ticks them at 60Hz and the CPU only reads/writes them.
#----------------------------------------------------------------------------------------------

import enum
import logging
import threading

from .constants import (
    FLAG_REGISTER, FONT_ADDR, FONT_SPRITE_SIZE, MAX_PROGRAM_SIZE,
    PROGRAM_LOAD_ADDR, height, width,
)
from .errors import InvalidOpcode, InvalidSpriteDigit, ProgramTooLarge
from .framebuffer import Framebuffer
from .memory import Memory, Stack
from .ports import Keypad, RandomByteSource, Timers, check_key
from .registers import RegisterFile

logger = logging.getLogger(__name__)


class State(enum.Enum):
    RUNNING = "running"
    WAITING_FOR_KEY = "waiting_for_key"


class Chip8:

    def __init__(self, timers=None, keypad=None, random_byte=None):
        # ---- ports ----
        self.timers = timers if timers is not None else Timers()
        self.keypad = keypad if keypad is not None else Keypad()
        self.random_byte = random_byte if random_byte is not None else RandomByteSource()

        # ---- CPU state ----
        self.memory = Memory()
        self.registers = RegisterFile()
        self.stack = Stack(self.memory, self.registers)
        self.display = Framebuffer()

        self._lock = threading.RLock()
        self.init()

    def init(self):
        with self._lock:
            self.memory.reset()
            self.registers.reset()
            self.display.clear()
            self.timers.reset()
            self.keypad.clear()
            self.state = State.RUNNING
            self.pending_register = None
            self.opcode = 0
            self.cycle_count = 0
            self.should_draw = True

    # ---- Convenience accessors ----
    @property
    def V(self):
        return self.registers.V

    @property
    def pc(self):
        return self.registers.pc

    @property
    def I(self):
        return self.registers.I

    @property
    def sp(self):
        return self.registers.sp

    @property
    def waiting_for_key(self):
        return self.state is State.WAITING_FOR_KEY

    # ---- Load ROM ----
    def load_program(self, data):
        data = bytes(data)
        if len(data) > MAX_PROGRAM_SIZE:
            raise ProgramTooLarge(len(data), MAX_PROGRAM_SIZE)
        with self._lock:
            # instructions are read big-endian on fetch, so bytes go in as-is
            self.memory.write_block(PROGRAM_LOAD_ADDR, data)
        logger.info("Loaded %d byte program at 0x%03X", len(data), PROGRAM_LOAD_ADDR)

    def framebuffer(self):
        return self.display.pixels()

    # ---- Input ----
    def notify_key_pressed(self, key):
        check_key(key)
        with self._lock:
            if self.state is not State.WAITING_FOR_KEY:
                return
            self.registers[self.pending_register] = key
            logger.debug("Key %X stored in V%X, resuming", key, self.pending_register)
            self.pending_register = None
            self.state = State.RUNNING

    # ---- Cycle ----
    def step(self):
        with self._lock:
            if self.state is State.WAITING_FOR_KEY:
                return

            # Fetch opcode
            self.opcode = self.memory.read_word(self.registers.pc)
            self.registers.pc = (self.registers.pc + 2) & 0xFFFF
            self.cycle_count += 1

            self._execute(self.opcode)

    def _execute(self, opcode):
        group = (opcode & 0xF000) >> 12

        if group == 0x0:
            self._0xxx(opcode)
        elif group == 0x1:
            self._1nnn(opcode)
        elif group == 0x2:
            self._2nnn(opcode)
        elif group == 0x3:
            self._3xkk(opcode)
        elif group == 0x4:
            self._4xkk(opcode)
        elif group == 0x5:
            self._5xy0(opcode)
        elif group == 0x6:
            self._6xkk(opcode)
        elif group == 0x7:
            self._7xkk(opcode)
        elif group == 0x8:
            self._8xxx(opcode)
        elif group == 0x9:
            self._9xy0(opcode)
        elif group == 0xA:
            self._Annn(opcode)
        elif group == 0xB:
            self._Bnnn(opcode)
        elif group == 0xC:
            self._Cxkk(opcode)
        elif group == 0xD:
            self._Dxyn(opcode)
        elif group == 0xE:
            self._Exxx(opcode)
        else:
            self._Fxxx(opcode)

    def _invalid(self, opcode):
        # pc already points past the offending instruction
        return InvalidOpcode(opcode, (self.registers.pc - 2) & 0xFFFF)

    def _skip(self):
        self.registers.pc = (self.registers.pc + 2) & 0xFFFF

    # ---- Opcode Handlers ----

    # 00E0 / 00EE - Clear Screen / Return from subroutine
    # 0nnn (call native routine) is not supported
    def _0xxx(self, opcode):
        if opcode == 0x00E0:
            self.display.clear()
            self.should_draw = True
            logger.debug("Clear the display")
        elif opcode == 0x00EE:
            self.registers.pc = self.stack.pop()
            logger.debug("Return to 0x%03X", self.registers.pc)
        else:
            raise self._invalid(opcode)

    # 1nnn - Jump to address NNN
    def _1nnn(self, opcode):
        self.registers.pc = opcode & 0x0FFF
        logger.debug("Jump to address 0x%03X", self.registers.pc)

    # 2nnn - Call subroutine at NNN
    def _2nnn(self, opcode):
        self.stack.push(self.registers.pc)
        self.registers.pc = opcode & 0x0FFF
        logger.debug("Call subroutine at 0x%03X", self.registers.pc)

    # 3xkk - Skip next instruction if Vx == kk
    def _3xkk(self, opcode):
        x = (opcode >> 8) & 0xF
        if self.registers[x] == opcode & 0xFF:
            self._skip()

    # 4xkk - Skip next instruction if Vx != kk
    def _4xkk(self, opcode):
        x = (opcode >> 8) & 0xF
        if self.registers[x] != opcode & 0xFF:
            self._skip()

    # 5xy0 - Skip next instruction if Vx == Vy
    def _5xy0(self, opcode):
        if opcode & 0xF:
            raise self._invalid(opcode)
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        if self.registers[x] == self.registers[y]:
            self._skip()

    # 6xkk - Set Vx = kk
    def _6xkk(self, opcode):
        x = (opcode >> 8) & 0xF
        self.registers[x] = opcode & 0xFF
        logger.debug("Set V%X = %d", x, opcode & 0xFF)

    # 7xkk - Add immediate, no carry flag
    def _7xkk(self, opcode):
        x = (opcode >> 8) & 0xF
        self.registers[x] = self.registers[x] + (opcode & 0xFF)
        logger.debug("Add %d to V%X: %d", opcode & 0xFF, x, self.registers[x])

    # 8xy0..8xyE - register to register math
    # VF is always written last so a flag result wins over VF as destination
    def _8xxx(self, opcode):
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        sub = opcode & 0xF
        vx, vy = self.registers[x], self.registers[y]

        if sub == 0x0:
            self.registers[x] = vy
        elif sub == 0x1:
            self.registers[x] = vx | vy
        elif sub == 0x2:
            self.registers[x] = vx & vy
        elif sub == 0x3:
            self.registers[x] = vx ^ vy
        elif sub == 0x4:
            total = vx + vy
            self.registers[x] = total & 0xFF
            self.registers[FLAG_REGISTER] = (total & 0x100) >> 8
        elif sub == 0x5:
            flag = 1 if vx > vy else 0
            self.registers[x] = vx - vy
            self.registers[FLAG_REGISTER] = flag
        elif sub == 0x6:
            self.registers[x] = vx >> 1
            self.registers[FLAG_REGISTER] = vx & 1
        elif sub == 0x7:
            flag = 1 if vy > vx else 0
            self.registers[x] = vy - vx
            self.registers[FLAG_REGISTER] = flag
        elif sub == 0xE:
            self.registers[x] = vx << 1
            self.registers[FLAG_REGISTER] = (vx >> 7) & 1
        else:
            raise self._invalid(opcode)
        logger.debug("8XY%X: V%X = %d, VF = %d", sub, x, self.registers[x], self.registers[FLAG_REGISTER])

    # 9xy0 - Skip next instruction if Vx != Vy
    def _9xy0(self, opcode):
        if opcode & 0xF:
            raise self._invalid(opcode)
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        if self.registers[x] != self.registers[y]:
            self._skip()

    # Annn - Set I = NNN
    def _Annn(self, opcode):
        self.registers.I = opcode & 0x0FFF
        logger.debug("Set I = %03X", self.registers.I)

    # Bnnn - NNN + V0 goes into I, not PC (kept as the interpreter always did)
    def _Bnnn(self, opcode):
        self.registers.I = ((opcode & 0x0FFF) + self.registers[0]) & 0xFFFF
        logger.debug("Set I = V0 + %03X = %03X", opcode & 0x0FFF, self.registers.I)

    # Cxkk - Vx = random byte AND kk
    def _Cxkk(self, opcode):
        x = (opcode >> 8) & 0xF
        self.registers[x] = self.random_byte() & (opcode & 0xFF)
        logger.debug("Set V%X = random_byte & %02X -> %d", x, opcode & 0xFF, self.registers[x])

    # Dxyn - XOR mem[I] into column Vx for n rows starting at Vy.
    # One column per row, and the same sprite byte every row.
    def _Dxyn(self, opcode):
        x = self.registers[(opcode >> 8) & 0xF] % width
        y = self.registers[(opcode >> 4) & 0xF]
        n = opcode & 0xF
        collision = 0
        if n:
            sprite = self.memory.read_byte(self.registers.I)
            for row in range(n):
                prev, new = self.display.xor(x, (y + row) % height, sprite)
                collision |= 1 if prev > new else 0
        self.registers[FLAG_REGISTER] = collision
        self.should_draw = True
        logger.debug("Drew sprite at (%d, %d) x%d, collision=%d", x, y, n, collision)

    # Ex9E / ExA1 - Skip next instruction if key Vx is / is not pressed
    def _Exxx(self, opcode):
        x = (opcode >> 8) & 0xF
        kk = opcode & 0xFF
        if kk == 0x9E:
            if self.keypad.is_key_pressed(self.registers[x]):
                self._skip()
        elif kk == 0xA1:
            if not self.keypad.is_key_pressed(self.registers[x]):
                self._skip()
        else:
            raise self._invalid(opcode)

    # Fx07..Fx65 - timers, memory, I, and key input
    def _Fxxx(self, opcode):
        x = (opcode >> 8) & 0xF
        kk = opcode & 0xFF
        regs = self.registers

        if kk == 0x07:
            regs[x] = self.timers.get_delay_timer()
        elif kk == 0x0A:
            # LD Vx, K: park until notify_key_pressed()
            self.state = State.WAITING_FOR_KEY
            self.pending_register = x
            logger.debug("Waiting for key press into V%X", x)
        elif kk == 0x15:
            self.timers.set_delay_timer(regs[x])
        elif kk == 0x18:
            self.timers.set_sound_timer(regs[x])
        elif kk == 0x1E:
            regs.I = (regs.I + regs[x]) & 0xFFFF
        elif kk == 0x29:
            digit = regs[x]
            if digit > 0xF:
                raise InvalidSpriteDigit(digit)
            regs.I = FONT_ADDR + digit * FONT_SPRITE_SIZE
        elif kk == 0x33:
            val = regs[x]
            self.memory.write_block(regs.I, (val // 100, (val // 10) % 10, val % 10))
        elif kk == 0x55:
            self.memory.write_block(regs.I, regs.V[:x + 1])
        elif kk == 0x65:
            for i, b in enumerate(self.memory.read_block(regs.I, x + 1)):
                regs[i] = b
        else:
            raise self._invalid(opcode)
