# Ports the CPU core talks to but does not drive itself:
# timers are ticked by the host at 60Hz, the keypad is updated by the
# host's input layer, and random bytes come from a swappable source.

import logging
import random

from .constants import NUM_KEYS
from .errors import InvalidKey

logger = logging.getLogger(__name__)


def check_key(key):
    if not 0 <= key < NUM_KEYS:
        raise InvalidKey(key)
    return key


class Timers:
    """Delay and sound timers, counted down by :meth:`tick`."""

    def __init__(self):
        self.delay_timer = 0
        self.sound_timer = 0

    def reset(self):
        self.delay_timer = 0
        self.sound_timer = 0

    def get_delay_timer(self):
        return self.delay_timer

    def set_delay_timer(self, ticks):
        self.delay_timer = ticks & 0xFF

    def get_sound_timer(self):
        return self.sound_timer

    def set_sound_timer(self, ticks):
        self.sound_timer = ticks & 0xFF

    @property
    def sound_active(self):
        return self.sound_timer > 0

    def tick(self):
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1
            if self.sound_timer == 0:
                logger.debug("Sound timer expired")


class Keypad:
    """State of the 16 hex keys 0x0-0xF."""

    def __init__(self):
        self.key_inputs = [0] * NUM_KEYS

    def press(self, key):
        self.key_inputs[check_key(key)] = 1

    def release(self, key):
        self.key_inputs[check_key(key)] = 0

    def clear(self):
        self.key_inputs = [0] * NUM_KEYS

    def is_key_pressed(self, key):
        return bool(self.key_inputs[check_key(key)])


class RandomByteSource:
    """Callable returning one random byte; seed it for repeatable runs."""

    def __init__(self, seed=None):
        self._random = random.Random(seed)

    def __call__(self):
        return self._random.getrandbits(8)
