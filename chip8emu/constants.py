# CHIP-8 machine layout and host configuration.
# Memory map follows the Wikipedia CHIP-8 layout; CPU reference is
# Cowgod's CHIP8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM

# ---- Memory map ----
MEMORY_SIZE = 0x1000
FONT_ADDR = 0x000
PROGRAM_LOAD_ADDR = 0x200
STACK_END_ADDR = 0xEA0        # lowest address a return address may occupy
# 0xEFF is the last byte of the stack region; return addresses are 16-bit
# so the first slot starts at 0xEFE
STACK_BASE_ADDR = 0xEFE

# programs may use everything between the load address and the stack
MAX_PROGRAM_SIZE = STACK_END_ADDR - PROGRAM_LOAD_ADDR

# ---- Registers ----
NUM_REGISTERS = 16
FLAG_REGISTER = 0xF

# ---- Display ----
width, height = 64, 32

# ---- Keypad ----
NUM_KEYS = 16

# ---- Host configuration ----
scale = 10
CPU_HZ = 500
TIMER_HZ = 60

# Standard CHIP-8 fontset (80 bytes), one 5-byte sprite per hex digit
FONT_SPRITE_SIZE = 5
fontset = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
] #notice 80 bytes
