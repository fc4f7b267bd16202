# pyglet host for the CHIP-8 core.
# We subclass pyglet.window.Window (graphics and keyboard handling) and
# override the handlers we need. The window owns the frame loop: it steps the
# CPU, ticks the timers at 60Hz and blits the framebuffer.

import logging

import numpy as np
import pyglet
from pyglet.window import key

from .constants import CPU_HZ, TIMER_HZ, height, scale, width
from .errors import Chip8Error

logger = logging.getLogger(__name__)

#map binding keys
keymap = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}


def toggle_debug_logging():
    root = logging.getLogger()
    root.setLevel(logging.INFO if root.level == logging.DEBUG else logging.DEBUG)
    logger.info("Debug logging %s", "on" if root.level == logging.DEBUG else "off")


class Chip8Window(pyglet.window.Window):

    def __init__(self, chip8, scale=scale, cpu_hz=CPU_HZ):
        # pyglet.window.Window already owns a read-only `scale` (DPI)
        self.pixel_scale = scale
        self.cpu_hz = cpu_hz
        self.chip8 = chip8
        super().__init__(
            width=width * scale,
            height=height * scale,
            caption="CHIP-8 Emulator",
            vsync=False
        )
        self.has_exit = False
        self._pending_cycles = 0.0

        # Pre-allocated small framebuffer (64x32 RGBA), upscaled with numpy.repeat
        self._small_framebuf = np.zeros((height, width, 4), dtype=np.uint8)
        self._small_framebuf[..., 3] = 255
        self.image = pyglet.image.ImageData(
            self.width,
            self.height,
            'RGBA',
            self._render_scaled().tobytes()
        )

        # ---- Performance Counters ----
        self._fps_counter = 0
        self._cps_counter = 0
        self.fps_label = pyglet.text.Label(
            "FPS: 0",
            font_size=12,
            x=5,
            y=self.height - 15,
            anchor_x='left',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )
        self.cps_label = pyglet.text.Label(
            "Cycles/s: 0",
            font_size=12,
            x=5,
            y=self.height - 30,
            anchor_x='left',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )
        self.sound_label = pyglet.text.Label(
            "BEEP",
            font_size=12,
            x=5,
            y=self.height - 45,
            anchor_x='left',
            anchor_y='center',
            color=(255, 255, 0, 255)
        )

        # Schedule CPU, timer and counter ticks
        pyglet.clock.schedule_interval(self._cpu_tick, 1.0 / self.cpu_hz)
        pyglet.clock.schedule_interval(self._timer_tick, 1.0 / TIMER_HZ)
        pyglet.clock.schedule_interval(self._update_bench, 1.0)

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        #@Override
        if symbol == key.ESCAPE:
            self.close()
        elif symbol == key.F1:
            toggle_debug_logging()
        elif symbol in keymap:
            self.chip8.keypad.press(keymap[symbol])
            self.chip8.notify_key_pressed(keymap[symbol])

    def on_key_release(self, symbol, modifiers):
        #@Override
        if symbol in keymap:
            self.chip8.keypad.release(keymap[symbol])

    # ---- Drawing ----
    def _render_scaled(self):
        # pyglet's origin is bottom-left, CHIP-8's is top-left
        lit = self.chip8.display.lit()[::-1]
        self._small_framebuf[..., :3] = lit[..., np.newaxis] * 255
        if self.pixel_scale != 1:
            return np.repeat(np.repeat(self._small_framebuf, self.pixel_scale, axis=0), self.pixel_scale, axis=1)
        return self._small_framebuf

    def on_draw(self):
        self.clear()
        if self.chip8.should_draw:
            self.image.set_data('RGBA', self.width * 4, self._render_scaled().tobytes())
            self.chip8.should_draw = False
        self.image.blit(0, 0)

        self.fps_label.draw()
        self.cps_label.draw()
        # no audio output, the sound timer shows as a HUD indicator
        if self.chip8.timers.sound_active:
            self.sound_label.draw()
        self._fps_counter += 1

    def _update_bench(self, dt):
        self.fps_label.text = f"FPS: {self._fps_counter / dt:.1f}"
        self.cps_label.text = f"Cycles/s: {self._cps_counter}"
        self._fps_counter = 0
        self._cps_counter = 0

    # ---- CPU cycle ----
    def _cpu_tick(self, dt):
        if self.has_exit:
            return
        # the clock rarely fires at the full rate, so catch up on missed cycles
        self._pending_cycles += dt * self.cpu_hz
        cycles = int(self._pending_cycles)
        self._pending_cycles -= cycles
        try:
            for _ in range(cycles):
                self.chip8.step()
                self._cps_counter += 1
        except Chip8Error as e:
            logger.error("Emulation error: %s", e)
            self.has_exit = True
            self.close()

    # ---- timers ----
    def _timer_tick(self, dt):
        self.chip8.timers.tick()

    def on_close(self):
        pyglet.clock.unschedule(self._cpu_tick)
        pyglet.clock.unschedule(self._timer_tick)
        pyglet.clock.unschedule(self._update_bench)
        super().on_close()


def run(chip8, scale=scale, cpu_hz=CPU_HZ):
    window = Chip8Window(chip8, scale=scale, cpu_hz=cpu_hz)
    pyglet.app.run()
    return window
