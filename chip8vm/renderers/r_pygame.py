#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the framebuffer onto an SDL window surface via PyGame.  The surface is
allocated at the emulated 64x32 resolution, and then the contents are
stretched (using 'Nearest Neighbour' translation) by the pixel size to fit the
window itself.  This means we don't have to draw the same pixel multiple
times.

Lit pixels are drawn white on a black background.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import Renderer as RendererBase
from ..constants import APP_NAME, DEFAULT_PIXEL_SIZE

COLOUR_OFF = b"\x00\x00\x00"
COLOUR_ON = b"\xFF\xFF\xFF"


class Renderer(RendererBase):
    def __init__(self, scale=None, **kwargs):
        if scale is None:
            scale = DEFAULT_PIXEL_SIZE

        super().__init__(scale)

        pygame.display.init()
        self.set_title(APP_NAME)
        self.scaled_size = (self.width * self.scale, self.height * self.scale)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        self.rgb_map = (COLOUR_OFF, COLOUR_ON)
        total_pixels = self.width * self.height
        self.rgb_buffer = bytearray(COLOUR_OFF * total_pixels)  # 24-bit
        # Copy of the last frame drawn, so unchanged frames can be skipped
        self.last_pixels = None

    def refresh_display(self, framebuffer):
        pixels = bytes(framebuffer.pixels)

        if pixels == self.last_pixels:
            return

        self.last_pixels = pixels
        rgb_buffer = self.rgb_buffer
        rgb_map = self.rgb_map

        # Update RGB buffer in-place to minimise allocations and PyGame calls
        for location, pixel in enumerate(pixels):
            rgb_location = location * 3
            rgb_buffer[rgb_location:rgb_location + 3] = rgb_map[pixel]

        # Blit the bytearray straight to the surface.  This is far quicker than very frequent PixelArray updates
        render_surface = pygame.image.frombuffer(rgb_buffer, (self.width, self.height), "RGB")
        scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
        self.display_surface.blit(scaled_win, (0, 0))
        pygame.display.flip()
        super().refresh_display(framebuffer)

    def set_title(self, title):
        pygame.display.set_caption(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
