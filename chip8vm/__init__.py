#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_INTRO, APP_COPYRIGHT, DEFAULT_KEYMAP, FONT_DATA, FONT_START, PROGRAM_START
from .cpu import CPU
from .debugger import Debugger
from .errors import Chip8Error
from .framebuffer import Framebuffer
from .hostio import Loader
from .keypad import Keypad
from .memory import Memory
from .scheduler import Scheduler
from .stack import Stack
from .timers import Timers


class StartupError(Exception):
    pass


def build_cpu(program, live_debug=False):
    # Put together one complete machine, with the font and program already in memory.  Raises ProgramTooLarge before
    # anything runs if the program doesn't fit.
    memory = Memory()
    memory.load(FONT_DATA, FONT_START)
    memory.load(program, PROGRAM_START)

    debugger = Debugger()
    debugger.set_live(live_debug)

    cpu = CPU(memory, Stack(), Framebuffer(), Keypad(), Timers(), debugger)
    cpu.pc = PROGRAM_START
    return cpu


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))

    clock_speed = args["clockspeed"]
    pixel_size = args["pixelsize"]

    if clock_speed is not None and clock_speed <= 0:
        raise StartupError("Clock speed must be at least 1 instruction per second.")

    if pixel_size is not None and pixel_size <= 0:
        raise StartupError("Pixel size must be at least 1.")

    opt_renderer = args["renderer"]
    auto_select_renderer = opt_renderer is None  # If necessary, try PyGame first, then Curses.
    mute_audio = args["mute"]

    # flake8: noqa: F401
    if auto_select_renderer or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            if auto_select_renderer:
                opt_renderer = "curses"
            else:
                raise StartupError(
                    "PyGame does not appear to be installed."
                )
        else:
            opt_renderer = "pygame"
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

            if mute_audio:
                from .audio.a_null import Audio
            else:
                from .audio.a_pygame import Audio

    if opt_renderer == "curses":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import curses
        except ImportError:
            if auto_select_renderer:
                raise StartupError(
                    "Neither PyGame nor Curses (or Windows-Curses) appear to be installed."
                )

            raise StartupError(
                "Curses (or Windows-Curses) does not appear to be installed."
            )
        else:
            from .inputs.i_curses import Inputs
            from .renderers.r_curses import Renderer

            # Terminal bells are very intrusive, so only beep if asked to
            if mute_audio or mute_audio is None:
                from .audio.a_null import Audio
            else:
                from .audio.a_curses import Audio

    if opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio

    # Read ROM binary, and build the machine around it before opening any windows
    try:
        program = Loader().load_binary(args["filename"])
    except OSError as e:
        raise StartupError("Unable to read ROM '{}': {}".format(args["filename"], e.strerror or e)) from None

    cpu = build_cpu(program, live_debug=args["debug"])

    # Set up a new rendering system, then host inputs and audio.  Inputs are linked to the renderer in case it
    # provides inputs too.
    renderer = Renderer(scale=pixel_size)
    inputs = None
    audio = None

    try:
        inputs = Inputs(args["keymap"] or DEFAULT_KEYMAP, renderer, cpu.keypad)
        audio = Audio()
        scheduler = Scheduler(cpu, cpu.timers, cpu.framebuffer, inputs, renderer, audio, clock_speed=clock_speed)
        scheduler.run()
    finally:
        # The CPU has quit, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        if audio is not None:
            audio.shutdown()

        if inputs is not None:
            inputs.shutdown()

        renderer.shutdown()
