#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "CHIP-8 VM"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory map
MEM_SIZE = 0x1000       # 4K, addressed with 12 bits
PROGRAM_START = 0x200   # Everything below here was originally reserved for the interpreter itself
FONT_START = 0x000      # Hex font lives in the reserved area
FONT_CHAR_SIZE = 5      # Each glyph is 8x5 pixels

# Machine
NUM_REGISTERS = 0x10
NUM_KEYS = 0x10
STACK_SIZE = 16
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# Clocks
DEFAULT_CLOCK_SPEED = 400  # Instructions per second
TIMER_FREQ = 60.0          # Delay and sound timers always count down at 60Hz
DISPLAY_FREQ = 60.0        # Host display refresh and input polling

# Host window
DEFAULT_PIXEL_SIZE = 8     # Host pixels per CHIP-8 pixel

# Default mappings for keys 0-F, later populated into a dictionary.  On a QWERTY keyboard, these give the usual layout:
#
#   1 2 3 C        1 2 3 4
#   4 5 6 D   ->   Q W E R
#   7 8 9 E        A S D F
#   A 0 B F        Z X C V
#
# The keyscans (in PyGame) and ASCII characters (in Curses) for these are the same code.
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# Hexadecimal digits 0-F, one byte per row, drawn with the high nibble
FONT_DATA = bytes((
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
))
