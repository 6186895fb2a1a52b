#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from chip8vm.timers import Timers


class TestTimers(unittest.TestCase):
    def setUp(self):
        self.timers = Timers()

    def test_timers_init(self):
        self.assertEqual(0, self.timers.get_delay())
        self.assertEqual(0, self.timers.get_sound())
        self.assertFalse(self.timers.is_sound_active())

    def test_timers_tick(self):
        self.timers.set_delay(2)
        self.timers.set_sound(1)
        self.assertTrue(self.timers.is_sound_active())
        self.timers.tick()
        self.assertEqual(1, self.timers.get_delay())
        self.assertEqual(0, self.timers.get_sound())
        self.assertFalse(self.timers.is_sound_active())

    def test_timers_stop_at_zero(self):
        self.timers.set_delay(1)
        self.timers.tick()
        self.timers.tick()
        self.assertEqual(0, self.timers.get_delay())
        self.assertEqual(0, self.timers.get_sound())

    def test_timers_one_second(self):
        self.timers.set_delay(60)

        for _ in range(60):
            self.timers.tick()

        self.assertEqual(0, self.timers.get_delay())

    def test_timers_byte_values(self):
        self.timers.set_delay(0x1FF)
        self.assertEqual(0xFF, self.timers.get_delay())
