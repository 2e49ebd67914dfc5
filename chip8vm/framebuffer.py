"""64x32 monochrome frame buffer.

Cells are stored as a flat numpy ``uint8`` array of ``width * height`` entries,
row-major with (0, 0) at the top-left. A cell is 0 when the pixel is off and
``PIXEL_ON`` (0xFF) when it is on, so a renderer can use the value directly as
a grey level.
"""

import numpy as np

from .config import width, height, pixel_count

PIXEL_OFF = 0x00
PIXEL_ON = 0xFF


class FrameBuffer:
    def __init__(self):
        self.pixels = np.zeros(pixel_count, dtype=np.uint8)
        self.should_draw = True  # so that the host only redraws when needed

    def clear(self):
        self.pixels[:] = PIXEL_OFF
        self.should_draw = True

    def index(self, x, y):
        # linear wrap: a sprite running off the right edge continues on the next row
        return (x + width * y) % pixel_count

    def get_pixel(self, index):
        return int(self.pixels[index])

    def is_on(self, index):
        return self.pixels[index] != PIXEL_OFF

    def toggle(self, index):
        """XOR the cell; returns True if it was on before (a collision)."""
        was_on = self.pixels[index] != PIXEL_OFF
        self.pixels[index] ^= PIXEL_ON
        self.should_draw = True
        return bool(was_on)

    def grid(self):
        return self.pixels.reshape(height, width)
