#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the buzzer within PyGame / SDL.

The emulated buzzer is very basic.  It is simply 'on' or 'off', so a single
period of a 440Hz square wave is built into an 8-bit sample, and looped for as
long as the buzzer is enabled.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100.0
BEEP_FREQUENCY = 440.0
DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self):
        super().__init__()
        pygame.mixer.pre_init(int(PLAYBACK_FREQUENCY), size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()

        # One period of the wave: high for the first half, low for the second (unsigned 8-bit samples)
        period = int(PLAYBACK_FREQUENCY / BEEP_FREQUENCY)
        half_period = period // 2
        self.sound = pygame.mixer.Sound(buffer=bytes(b"\xFF" * half_period + b"\x00" * (period - half_period)))
        self.sound.set_volume(DEFAULT_VOLUME)

    def enable_buzzer(self, enabled):
        # Play or stop the looping sample.  If the sound is already playing, it won't be restarted.
        if enabled:
            if not self.buzzer_enabled:
                self.sound.play(-1)
        else:
            if self.buzzer_enabled:
                self.sound.stop()

        super().enable_buzzer(enabled)

    def shutdown(self):
        if self.sound:
            self.sound.stop()

        pygame.mixer.quit()
        super().shutdown()
