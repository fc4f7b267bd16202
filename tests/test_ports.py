import pytest

from chip8emu.errors import InvalidKey
from chip8emu.framebuffer import Framebuffer
from chip8emu.ports import Keypad, RandomByteSource, Timers


class TestTimers:

    def test_tick_counts_down_to_zero(self):
        timers = Timers()
        timers.set_delay_timer(2)
        timers.set_sound_timer(1)
        assert timers.sound_active
        timers.tick()
        assert timers.get_delay_timer() == 1
        assert timers.get_sound_timer() == 0
        assert not timers.sound_active
        timers.tick()
        timers.tick()
        assert timers.get_delay_timer() == 0

    def test_values_are_bytes(self):
        timers = Timers()
        timers.set_delay_timer(0x1FF)
        assert timers.get_delay_timer() == 0xFF


class TestKeypad:

    def test_press_and_release(self):
        keypad = Keypad()
        keypad.press(0xA)
        assert keypad.is_key_pressed(0xA)
        assert not keypad.is_key_pressed(0xB)
        keypad.release(0xA)
        assert not keypad.is_key_pressed(0xA)

    def test_clear(self):
        keypad = Keypad()
        for k in range(16):
            keypad.press(k)
        keypad.clear()
        assert not any(keypad.is_key_pressed(k) for k in range(16))

    @pytest.mark.parametrize("key", [-1, 16, 0xFF])
    def test_out_of_range(self, key):
        with pytest.raises(InvalidKey):
            Keypad().is_key_pressed(key)


class TestRandomByteSource:

    def test_seeded_is_repeatable(self):
        a, b = RandomByteSource(1234), RandomByteSource(1234)
        assert [a() for _ in range(20)] == [b() for _ in range(20)]

    def test_bytes_in_range(self):
        source = RandomByteSource(7)
        assert all(0 <= source() <= 0xFF for _ in range(200))


class TestFramebuffer:

    def test_xor_returns_previous_and_new(self):
        fb = Framebuffer()
        assert fb.xor(3, 4, 0x0F) == (0, 0x0F)
        assert fb.xor(3, 4, 0xFF) == (0x0F, 0xF0)
        assert fb.get(3, 4) == 0xF0

    def test_lit_is_row_major(self):
        fb = Framebuffer()
        fb.xor(63, 0, 1)
        lit = fb.lit()
        assert lit.shape == (32, 64)
        assert lit[0, 63]
        assert lit.sum() == 1

    def test_pixels_view_is_read_only(self):
        fb = Framebuffer()
        view = fb.pixels()
        with pytest.raises(ValueError):
            view[0, 0] = 1
        fb.xor(0, 0, 1)
        assert view[0, 0] == 1
