#!/usr/bin/env python3

"""
Keypad State

The 16-key hexadecimal keypad.  An input plugin sets and clears the flags as
host keys go down and up, and the CPU only ever reads them.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_KEYS


class Keypad:
    def __init__(self):
        self.key_down = [False] * NUM_KEYS

    def set_key(self, key, pressed):
        self.key_down[key] = bool(pressed)

    def is_key_down(self, key):
        return self.key_down[key]

    def get_keys_down(self):
        return [key for key, down in enumerate(self.key_down) if down]

    def release_all(self):
        for key in range(NUM_KEYS):
            self.key_down[key] = False
