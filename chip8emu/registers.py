from .constants import NUM_REGISTERS, PROGRAM_LOAD_ADDR, STACK_BASE_ADDR


class RegisterFile:
    """V0..VF, the I (index) register, the program counter and stack pointer."""

    def __init__(self):
        self.reset()

    def reset(self):
        self.V = [0] * NUM_REGISTERS    # 16 general-purpose 8-bit registers
        self.I = 0                      # memory pointer
        self.pc = PROGRAM_LOAD_ADDR     # program counter starts at 0x200
        self.sp = STACK_BASE_ADDR

    def __getitem__(self, index):
        return self.V[index]

    def __setitem__(self, index, value):
        self.V[index] = value & 0xFF

    def __repr__(self):
        regs = " ".join("V%X=%02X" % (i, v) for i, v in enumerate(self.V))
        return "<RegisterFile %s I=%04X PC=%04X SP=%04X>" % (regs, self.I, self.pc, self.sp)
