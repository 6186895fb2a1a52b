#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from unittest.mock import patch
import pygame
from chip8vm import build_cpu
from chip8vm.constants import DEFAULT_KEYMAP
from chip8vm.inputs.i_null import Inputs, InputsError
from chip8vm.inputs.i_pygame import Inputs as PyGameInputs
from chip8vm.keypad import Keypad
from chip8vm.renderers.r_null import Renderer


class TestInputs(unittest.TestCase):
    def setUp(self):
        self.renderer = Renderer()
        self.keypad = Keypad()

    def test_inputs_default_keymap(self):
        inputs = Inputs(DEFAULT_KEYMAP, self.renderer, self.keypad)
        self.assertEqual(0x0, inputs.keymap_dict[ord("x")])
        self.assertEqual(0x1, inputs.keymap_dict[ord("1")])
        self.assertEqual(0xC, inputs.keymap_dict[ord("4")])
        self.assertEqual(0xF, inputs.keymap_dict[ord("v")])
        self.assertEqual(16, len(inputs.keymap_dict))
        self.assertFalse(inputs.process_messages())

    def test_inputs_lowercase(self):
        keymap = ",".join(str(ord(char)) for char in "X123QWEASDZC4RFV")
        inputs = Inputs(keymap, self.renderer, self.keypad, force_lowercase=True)
        self.assertEqual(0x0, inputs.keymap_dict[ord("x")])

    def test_inputs_bad_keymaps(self):
        for keymap in "1,2,3", ",".join(["1"] * 16), ",".join(["a"] * 16):
            self.assertRaises(InputsError, Inputs, keymap, self.renderer, self.keypad)


class TestPyGameInputs(unittest.TestCase):
    def setUp(self):
        # F30A waits for a keypress into V3.  'w' is key 5 in the default keymap.
        self.cpu = build_cpu(b"\xF3\x0A")
        self.keypad = self.cpu.keypad
        self.inputs = PyGameInputs(DEFAULT_KEYMAP, Renderer(), self.keypad)

    def _process(self, *events):
        with patch("pygame.event.get", return_value=list(events)):
            return self.inputs.process_messages()

    def test_pygame_inputs_press_release(self):
        self.assertFalse(self._process(pygame.event.Event(pygame.KEYDOWN, key=ord("w"))))
        self.assertTrue(self.keypad.is_key_down(0x5))
        self.assertFalse(self._process(pygame.event.Event(pygame.KEYUP, key=ord("w"))))
        self.assertFalse(self.keypad.is_key_down(0x5))

    def test_pygame_inputs_tap_within_one_frame(self):
        self.cpu.step()
        self.assertTrue(self.cpu.awaiting_key)
        self._process(
            pygame.event.Event(pygame.KEYDOWN, key=ord("w")), pygame.event.Event(pygame.KEYUP, key=ord("w"))
        )

        # The tap stays visible until the next check
        self.assertTrue(self.keypad.is_key_down(0x5))
        self.assertTrue(self.cpu.step())
        self.assertFalse(self.cpu.awaiting_key)
        self.assertEqual(0x5, self.cpu.v[0x3])

        self._process()
        self.assertFalse(self.keypad.is_key_down(0x5))

    def test_pygame_inputs_tap_then_press_again(self):
        self._process(
            pygame.event.Event(pygame.KEYDOWN, key=ord("w")), pygame.event.Event(pygame.KEYUP, key=ord("w"))
        )
        self._process(pygame.event.Event(pygame.KEYDOWN, key=ord("w")))
        self.assertTrue(self.keypad.is_key_down(0x5))

    def test_pygame_inputs_focus_lost(self):
        self._process(
            pygame.event.Event(pygame.KEYDOWN, key=ord("w")), pygame.event.Event(pygame.KEYDOWN, key=ord("x"))
        )
        self.assertEqual([0x0, 0x5], self.keypad.get_keys_down())
        self._process(pygame.event.Event(pygame.WINDOWFOCUSLOST))
        self.assertEqual([], self.keypad.get_keys_down())

    def test_pygame_inputs_quit(self):
        self.assertTrue(self._process(pygame.event.Event(pygame.KEYUP, key=pygame.K_ESCAPE)))
        self.assertTrue(self._process(pygame.event.Event(pygame.QUIT)))
