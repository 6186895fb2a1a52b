#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import sys
from argparse import ArgumentParser
from chip8vm import main, Chip8Error, StartupError
from chip8vm.constants import APP_NAME, APP_VERSION, DEFAULT_CLOCK_SPEED, DEFAULT_KEYMAP, DEFAULT_PIXEL_SIZE
from chip8vm.inputs.i_null import InputsError
from chip8vm.renderers.r_null import RendererError

__version__ = APP_VERSION


def parse_args(argv=None):
    parser = ArgumentParser(prog="chip8", description="{} -- a CHIP-8 interpreter".format(APP_NAME))
    parser.add_argument("filename", metavar="ROMFILE", help="raw CHIP-8 binary to execute (normally ending in .ch8)")
    parser.add_argument(
        "-c", "--clockspeed", type=int,
        help="CPU speed in instructions/second (default {})".format(DEFAULT_CLOCK_SPEED)
    )
    parser.add_argument(
        "-p", "--pixelsize", type=int,
        help=" ".join((
            "set the host pixels per CHIP-8 pixel in PyGame mode (default {}),".format(DEFAULT_PIXEL_SIZE),
            "and horizontal scale in Curses mode (default 2)"
        ))
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "curses", "null"],
        help="set the rendering, input, and audio systems (pygame by default if available, otherwise curses)"
    )
    parser.add_argument(
        "-m", "--mute", type=int, choices=[0, 1],
        help="mute the buzzer.  0 = unmuted (default for PyGame), 1 = muted (default for Curses)"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 keyscan codes (PyGame) or character numbers (Curses).  Separate each decimal with a comma"
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="print the registers and instruction before every step.  Slows CPU execution"
    )
    parser.add_argument("-V", "--version", action="version", version="%(prog)s {}".format(APP_VERSION))
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


def run(argv=None):
    args = vars(parse_args(argv))

    try:
        # It is possible to start the emulator from a GUI by calling main() with a dictionary
        main(args)
    except (Chip8Error, StartupError, InputsError, RendererError) as e:
        print("Emulation halted.\n\n{}".format(e), file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(run())
