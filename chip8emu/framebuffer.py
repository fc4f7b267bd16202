# Framebuffer - 64x32 grid, one byte per cell, a cell is lit when nonzero.
# Cells are addressed frame[x][y] (column, row).

import numpy as np

from .constants import width, height


class Framebuffer:

    def __init__(self):
        self.cells = np.zeros((width, height), dtype=np.uint8)

    def clear(self):
        self.cells[:] = 0

    def get(self, x, y):
        return int(self.cells[x, y])

    def xor(self, x, y, value):
        """XOR ``value`` into cell (x, y) and return (previous, new)."""
        prev = int(self.cells[x, y])
        new = prev ^ (value & 0xFF)
        self.cells[x, y] = new
        return prev, new

    def pixels(self):
        # read-only view for renderers
        view = self.cells.view()
        view.flags.writeable = False
        return view

    def lit(self):
        """Boolean mask laid out row-major (height, width), ready for blitting."""
        return self.cells.T != 0
