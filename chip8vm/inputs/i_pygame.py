#!/usr/bin/env python3

"""
PyGame Input Plugin

Scans the keyboard and properly detects key 'press' and 'release' events,
passing them straight through to the keypad.  Note that the check should not be
called more often than 60Hz, as constantly checking the queue is time
consuming.

A key tapped so quickly that it went down and up within one check would never
be seen by the CPU, so its release is held back until the next check.  Losing
window focus releases every key, as the window won't get the key up events.

Closing the window or releasing ESC asks the emulator to quit.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .i_null import Inputs as InputsBase


class Inputs(InputsBase):
    def __init__(self, keymap, renderer, keypad):
        self.pygame_methods = {
            pygame.QUIT:             self._pygame_quit,
            pygame.KEYDOWN:          self._pygame_keydown,
            pygame.KEYUP:            self._pygame_keyup,
            pygame.WINDOWFOCUSLOST:  self._pygame_focus_lost
        }
        self.keys_pressed_now = set()
        self.delayed_releases = set()

        super().__init__(keymap, renderer, keypad)

    def process_messages(self):
        # Taps from the previous check have had a whole frame to be noticed, so let them go now
        for hex_key in self.delayed_releases:
            self.keypad.set_key(hex_key, False)

        self.delayed_releases = set()
        self.keys_pressed_now = set()

        # Call PyGame method based on fast dictionary lookup of event
        quit_program = False

        for event in pygame.event.get():
            pygame_method = self.pygame_methods.get(event.type)

            if pygame_method and pygame_method(event):  # Check via short circuit that we don't have 'None'
                quit_program = True  # Process more events, even if planning to quit

        return quit_program

    def _pygame_quit(self, _):
        return True

    def _pygame_keydown(self, event):
        hex_key = self.keymap_dict.get(event.key)

        if hex_key is not None:
            self.keypad.set_key(hex_key, True)
            self.keys_pressed_now.add(hex_key)
            self.delayed_releases.discard(hex_key)

        return False

    def _pygame_keyup(self, event):
        if event.key == pygame.K_ESCAPE:
            return True

        hex_key = self.keymap_dict.get(event.key)

        if hex_key is not None:
            if hex_key in self.keys_pressed_now:
                self.delayed_releases.add(hex_key)
            else:
                self.keypad.set_key(hex_key, False)

        return False

    def _pygame_focus_lost(self, _):
        self.keypad.release_all()
        self.keys_pressed_now = set()
        self.delayed_releases = set()
        return False
