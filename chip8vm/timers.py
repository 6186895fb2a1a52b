#!/usr/bin/env python3

"""
Delay and Sound Timers

Two 8-bit countdown registers.  Each one drops by 1 per tick until it reaches
zero, and the scheduler ticks them at a fixed 60Hz of real time, no matter how
fast the CPU is running.  Programs rely on this to time animations and game
logic, so the rate must never follow the instruction count.

The sound timer doesn't make any noise itself.  While it is non-zero, the
audio plugin is expected to sound the buzzer.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Timers:
    def __init__(self):
        self.dt = 0  # Delay timer
        self.ds = 0  # Sound timer

    def tick(self):
        if self.dt > 0:
            self.dt -= 1

        if self.ds > 0:
            self.ds -= 1

    def set_delay(self, value):
        self.dt = value & 0xFF

    def set_sound(self, value):
        self.ds = value & 0xFF

    def get_delay(self):
        return self.dt

    def get_sound(self):
        return self.ds

    def is_sound_active(self):
        return self.ds > 0
