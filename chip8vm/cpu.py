#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  Each call
to step() fetches one 2-byte big-endian instruction at the program counter,
moves the program counter on, and then looks up and executes the handler for
that instruction.

The CPU holds no idea of time.  How often step() is called, and how often the
timers count down, is decided by the scheduler.

Waiting for a keypress (Fx0A) doesn't block.  The CPU notes which register the
key should go into, and each following step() just checks the keypad and
returns False until a new key goes down, so the host keeps rendering and
reading inputs in the meantime.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import randint
from .constants import APP_INTRO, FONT_START, FONT_CHAR_SIZE, NUM_REGISTERS, PROGRAM_START
from .errors import Chip8Error

CPU_ENDIAN = "big"  # CHIP-8 is big-endian


class InvalidOpcode(Chip8Error):
    def __init__(self, opcode, address, debug_info=""):
        self.opcode = opcode
        self.address = address
        super().__init__(
            "Opcode 0x{:04x} at address 0x{:03x} is not a valid CHIP-8 instruction.{}".format(
                opcode, address, debug_info
            )
        )


class CPU:
    def __init__(self, memory, stack, framebuffer, keypad, timers, debugger):
        self.memory = memory
        self.stack = stack
        self.framebuffer = framebuffer
        self.keypad = keypad
        self.timers = timers
        self.debugger = debugger
        self.live_debug = self.debugger.is_live()

        # Define instruction pointers.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = {
            # Initial lookup for instructions' first nibble
            0x0: self._0nnn,  # Alias for bitmask 0xFFFF
            0x1: self._1nnn,
            0x2: self._2nnn,
            0x3: self._3xkk,
            0x4: self._4xkk,
            0x5: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x6: self._6xkk,
            0x7: self._7xkk,
            0x8: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x9: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0xA: self._Annn,
            0xB: self._Bnnn,
            0xC: self._Cxkk,
            0xD: self._Dxyn,
            0xE: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            0xF: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            # Instructions beginning with nibble 0x0, bitmask 0xFFFF (i.e., exact match)
            0x00E0: self._00E0,
            0x00EE: self._00EE,
            # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
            0x5000: self._5xy0,
            0x8000: self._8xy0,
            0x8001: self._8xy1,
            0x8002: self._8xy2,
            0x8003: self._8xy3,
            0x8004: self._8xy4,
            0x8005: self._8xy5,
            0x8006: self._8xy6,
            0x8007: self._8xy7,
            0x800E: self._8xyE,
            0x9000: self._9xy0,
            # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
            0xE09E: self._Ex9E,
            0xE0A1: self._ExA1,
            0xF007: self._Fx07,
            0xF00A: self._Fx0A,
            0xF015: self._Fx15,
            0xF018: self._Fx18,
            0xF01E: self._Fx1E,
            0xF029: self._Fx29,
            0xF033: self._Fx33,
            0xF055: self._Fx55,
            0xF065: self._Fx65
        }

        # Initialise registers
        self.v = memoryview(bytearray(NUM_REGISTERS))  # Bytearrays are mutable, so register updates are fast
        self.i = 0  # Index register

        # Initialise program counter and current opcode
        self.pc = PROGRAM_START
        self.debug_pc = PROGRAM_START
        self.opcode = 0

        # Input-related vars
        self.awaiting_key = False
        self.key_register = 0
        self.held_keys = set()

    def step(self):
        # Returns False if no instruction could run (waiting on a keypress), so the caller doesn't count it
        if self.awaiting_key:
            return self._check_keypress()

        # Keep track of the program counter before altering it in any way, for error reports and rollback
        self.debug_pc = self.pc
        self.opcode = self.fetch()

        if self.live_debug:
            self.debugger.output(self, self.debugger.disassemble(self.opcode))

        self.inc_pc()  # Program counter updates after fetch, but before execute

        try:
            self.decode_exec()
        except Chip8Error:
            # Leave the program counter pointing at the instruction that failed
            self.pc = self.debug_pc
            raise

        return True

    def fetch(self):
        return int.from_bytes(self.memory.read_block(self.pc, 2), CPU_ENDIAN, signed=False)

    def _call_masked_instruction(self, masked_opcode):
        instruction = self.instructions.get(masked_opcode)

        if instruction is None:
            self._opcode_unsupported()

        instruction()

    def decode_exec(self):
        self._call_masked_instruction((0xF000 & self.opcode) >> 12)

    def inc_pc(self):
        self.pc = (self.pc + 2) & 0xFFFF

    # References to Vx, Vy, byte and addr are always in the same opcode position throughout all instructions, so avoid
    # excessive code duplication.  Don't reference these more than necessary as they are recalculated each time.
    @property
    def vx(self):
        return (self.opcode & 0xF00) >> 8

    @property
    def vy(self):
        return (self.opcode & 0xF0) >> 4

    @property
    def addr(self):
        return self.opcode & 0xFFF

    @property
    def byte(self):
        return self.opcode & 0xFF

    @property
    def nibble(self):
        return self.opcode & 0xF

    def _opcode_unsupported(self):
        raise InvalidOpcode(
            self.opcode, self.debug_pc,
            "\n\n{}Debug info:\n{}".format(APP_INTRO, self.debugger.debug(self, "???", verbose=True))
        ) from None

    def _check_keypress(self):
        keys_down = self.keypad.get_keys_down()
        # Keys already held when the wait started only count once they've been released and pressed again
        self.held_keys.intersection_update(keys_down)

        for key in keys_down:
            if key not in self.held_keys:
                self.v[self.key_register] = key
                self.awaiting_key = False
                self.held_keys.clear()
                return True

        return False

    def _0nnn(self):
        opcode = self.opcode

        if opcode < 0x10:
            # Opcodes 0x0 - 0xF are used internally for indexing the first nibble, so can't be looked up directly
            self._opcode_unsupported()

        self._call_masked_instruction(opcode)

    def _5nnn_8nnn_9nnn(self):
        self._call_masked_instruction(self.opcode & 0xF00F)

    def _Ennn_Fnnn(self):
        self._call_masked_instruction(self.opcode & 0xF0FF)

    def _00E0(self):  # CLS
        self.framebuffer.clear()

    def _00EE(self):  # RET
        self.pc = self.stack.pop()

    def _1nnn(self):  # JP addr
        self.pc = self.addr

    def _2nnn(self):  # CALL addr
        self.stack.push(self.pc)
        self.pc = self.addr

    def _post_skip(self):
        self.inc_pc()

    def _3xkk(self):  # SE Vx, byte
        if self.v[self.vx] == self.byte:
            self._post_skip()

    def _4xkk(self):  # SNE Vx, byte
        if self.v[self.vx] != self.byte:
            self._post_skip()

    def _5xy0(self):  # SE Vx, Vy
        if self.v[self.vx] == self.v[self.vy]:
            self._post_skip()

    def _6xkk(self):  # LD Vx, byte
        self.v[self.vx] = self.byte

    def _7xkk(self):  # ADD Vx, byte
        vx = self.vx
        # No carry flag for this one
        self.v[vx] = (self.v[vx] + self.byte) & 0xFF

    def _8xy0(self):  # LD Vx, Vy
        self.v[self.vx] = self.v[self.vy]

    def _8xy1(self):  # OR Vx, Vy
        self.v[self.vx] |= self.v[self.vy]

    def _8xy2(self):  # AND Vx, Vy
        self.v[self.vx] &= self.v[self.vy]

    def _8xy3(self):  # XOR Vx, Vy
        self.v[self.vx] ^= self.v[self.vy]

    def _8xy4(self):  # ADD Vx, Vy
        vx = self.vx
        val = self.v[vx] + self.v[self.vy]
        self.v[vx] = val & 0xFF
        self.v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, val):  # Post-SUB/SUBN
        self.v[self.vx] = val & 0xFF
        # Vf is set when NOT borrowing, and this should happen AFTER Vx is set, as sometimes Vf is specified in the
        # parameters.
        self.v[0xF] = int(val >= 0)

    def _8xy5(self):  # SUB Vx, Vy
        self._post_8xy5_8xy7(self.v[self.vx] - self.v[self.vy])

    def _8xy6(self):  # SHR Vx
        # Shifts operate on Vx.  Vy is ignored.
        vx = self.vx
        val = self.v[vx]
        self.v[vx] = val >> 1
        self.v[0xF] = val & 1  # The whole byte gets set just for the flag

    def _8xy7(self):  # SUBN Vx, Vy
        self._post_8xy5_8xy7(self.v[self.vy] - self.v[self.vx])

    def _8xyE(self):  # SHL Vx
        vx = self.vx
        val = self.v[vx]
        self.v[vx] = (val << 1) & 0xFF
        self.v[0xF] = val >> 7

    def _9xy0(self):  # SNE Vx, Vy
        if self.v[self.vx] != self.v[self.vy]:
            self._post_skip()

    def _Annn(self):  # LD I, addr
        self.i = self.addr

    def _Bnnn(self):  # JP V0, addr
        # Not masked.  A jump past the top of memory fails on the next fetch.
        self.pc = self.v[0] + self.addr

    def _Cxkk(self):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[self.vx] = randint(0, 0xFF) & self.byte

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        # Read the whole sprite first, so a sprite running off the end of memory doesn't get half drawn
        sprite = self.memory.read_block(self.i, self.nibble)
        vid_width, vid_height = self.framebuffer.get_vid_size()
        # The sprite's start always wraps, and so does the rest of it
        collision = self.framebuffer.draw_sprite(self.v[self.vx] % vid_width, self.v[self.vy] % vid_height, sprite)
        self.v[0xF] = int(collision)

    def _Ex9E(self):  # SKP Vx
        if self.keypad.is_key_down(self.v[self.vx] & 0xF):
            self._post_skip()

    def _ExA1(self):  # SKNP Vx
        if not self.keypad.is_key_down(self.v[self.vx] & 0xF):
            self._post_skip()

    def _Fx07(self):  # LD Vx, DT
        self.v[self.vx] = self.timers.get_delay()

    def _Fx0A(self):  # LD Vx, K
        # This opcode waits for a keypress, but since the sound and delay timers still need to expire correctly, and
        # the display still needs updating, we'll note the destination and hand control back.  The program counter
        # already points past this instruction, so nothing needs re-running once the key arrives.
        self.awaiting_key = True
        self.key_register = self.vx
        self.held_keys = set(self.keypad.get_keys_down())

    def _Fx15(self):  # LD DT, Vx
        self.timers.set_delay(self.v[self.vx])

    def _Fx18(self):  # LD ST, Vx
        self.timers.set_sound(self.v[self.vx])

    def _Fx1E(self):  # ADD I, Vx
        self.i = (self.i + self.v[self.vx]) & 0xFFFF

    def _Fx29(self):  # LD F, Vx
        self.i = FONT_START + FONT_CHAR_SIZE * (self.v[self.vx] & 0xF)

    def _Fx33(self):  # LD B, Vx
        val = self.v[self.vx]
        # Most-significant digit first
        self.memory.write_block(self.i, (val // 100, (val // 10) % 10, val % 10))

    def _Fx55(self):  # LD [I], Vx
        # Ensure with +1 that the final register is copied.  I is left alone.
        self.memory.write_block(self.i, self.v[:self.vx + 1])

    def _Fx65(self):  # LD Vx, [I]
        vx = self.vx
        self.v[:vx + 1] = self.memory.read_block(self.i, vx + 1)
