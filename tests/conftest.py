import pytest

from chip8emu import Chip8


def load_words(chip8, *words):
    """Load 16-bit opcodes as a big-endian program."""
    data = bytearray()
    for w in words:
        data += bytes(((w >> 8) & 0xFF, w & 0xFF))
    chip8.load_program(data)


@pytest.fixture
def chip8():
    return Chip8(random_byte=lambda: 0xAB)


@pytest.fixture
def run_ops(chip8):
    """Load the given opcodes and step once per opcode."""
    def _run(*words):
        load_words(chip8, *words)
        for _ in words:
            chip8.step()
        return chip8
    return _run


@pytest.fixture
def load(chip8):
    def _load(*words):
        load_words(chip8, *words)
        return chip8
    return _load
