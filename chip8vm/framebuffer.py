#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here by the CPU, and read by the host rendering system once
per displayed frame.  Programs cannot write directly into video memory.
Instead, sprites are drawn using an XOR method: each set bit in a sprite row
flips the pixel underneath it.

A collision is reported when any pixel that was on gets switched off by a
draw.  Games use this for hit detection, and drawing the same sprite twice in
the same place erases it again.

Sprite coordinates wrap around the edges of the 64x32 display rather than
being clipped.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import DISPLAY_WIDTH, DISPLAY_HEIGHT


class Framebuffer:
    def __init__(self, vid_width=DISPLAY_WIDTH, vid_height=DISPLAY_HEIGHT):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        # One byte per pixel (0 or 1), row by row
        self.pixels = bytearray(self.vid_size)

    def clear(self):
        self.pixels[:] = bytes(self.vid_size)

    def draw_sprite(self, x, y, sprite):
        vid_width = self.vid_width
        vid_height = self.vid_height
        pixels = self.pixels
        collision = False

        for row, spr_data in enumerate(sprite):
            row_loc = ((y + row) % vid_height) * vid_width

            for col in range(8):
                if spr_data & (0x80 >> col):
                    vram_loc = row_loc + (x + col) % vid_width

                    if pixels[vram_loc]:
                        # Don't stop drawing, just remember something was erased
                        collision = True

                    pixels[vram_loc] ^= 1

        return collision

    def get_pixel(self, x, y):
        # Coordinates wrap, the same as when drawing
        return bool(self.pixels[(y % self.vid_height) * self.vid_width + x % self.vid_width])

    def get_vid_size(self):
        return self.vid_width, self.vid_height
