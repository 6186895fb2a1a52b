#!/usr/bin/env python3

"""
Curses Renderer Plugin

Draws the framebuffer in a standard Linux-style TTY Terminal, the Windows
Command Prompt, or PowerShell.  Each lit pixel is drawn as inverted spaces,
stretched horizontally by the scale to keep the aspect ratio roughly right.

The top line of the pad is used for the title and performance report.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
import _curses
from .r_null import Renderer as RendererBase

DEFAULT_CURSES_SCALE = 2


class Renderer(RendererBase):
    def __init__(self, scale=None, **kwargs):
        if scale is None:
            scale = DEFAULT_CURSES_SCALE  # Terminal cells are big already, so the window pixel size doesn't apply

        super().__init__(scale)

        self.pixel_char = " " * self.scale
        self.last_screen_height = -1
        self.last_screen_width = -1
        self.last_pixels = None
        self.refresh_needed = True
        self.screen = curses.initscr()

        try:
            curses.curs_set(0)
        except _curses.error:
            pass

        curses.noecho()
        curses.cbreak()

        # We have to allow one extra character, presumably for the cursor, otherwise we can't write the furthest
        # bottom-right pixel.  The extra line at the top is for the title.
        self.pad = curses.newpad(self.height + 2, self.width * self.scale + 1)

    def refresh_display(self, framebuffer):
        pixels = bytes(framebuffer.pixels)

        if pixels != self.last_pixels:
            # Only redraw the cells that changed
            last_pixels = self.last_pixels
            width = self.width

            for location, pixel in enumerate(pixels):
                if last_pixels is None or last_pixels[location] != pixel:
                    y, x = divmod(location, width)
                    attr = curses.A_REVERSE if pixel else curses.A_NORMAL
                    self.pad.addstr(y + 1, x * self.scale, self.pixel_char, attr)

            self.last_pixels = pixels
            self.refresh_needed = True

        screen_height, screen_width = self.screen.getmaxyx()

        if screen_height != self.last_screen_height or screen_width != self.last_screen_width:
            # Screen resolution changed, redraw everything
            self.screen.clear()

            if hasattr(curses, "resizeterm"):
                # This doesn't work on Windows
                curses.resizeterm(screen_height, screen_width)

            self.screen.refresh()
            self.last_screen_height = screen_height
            self.last_screen_width = screen_width
            self.refresh_needed = True

        if self.refresh_needed:
            self.pad.refresh(0, 0, 0, 0, screen_height - 1, screen_width - 1)
            self.refresh_needed = False

        super().refresh_display(framebuffer)

    def set_title(self, title):
        title_width = self.width * self.scale

        if title_width > len(title):
            self.pad.addstr(0, 0, title + " " * (title_width - len(title)), curses.A_REVERSE)
            self.refresh_needed = True

    def get_curses_screen(self):
        return self.screen

    def shutdown(self):
        curses.nocbreak()
        curses.echo()

        try:
            curses.curs_set(1)
        except _curses.error:
            pass

        curses.endwin()
        super().shutdown()
