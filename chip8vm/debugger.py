#!/usr/bin/env python3

"""
CPU Debugger

If enabled, this will output information before each instruction executed:
    * All 16 of the [V] registers, starting with most significant (Vf) and
      reducing to least significant (V0)
    * I  - Index register
    * DT - Delay timer
    * ST - Sound timer
    * PC - Program counter
    * OP - OpCode number
    * IN - Disassembled instruction

If a crash occurs, all of the above will be included in the error, with the
addition of the stack contents.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# (bitmask, masked opcode, mnemonic).  Fields available to the mnemonics:
# x/y = register (0-15), n = nibble, kk = byte, nnn = address
MNEMONICS = (
    (0xFFFF, 0x00E0, "CLS"),
    (0xFFFF, 0x00EE, "RET"),
    (0xF000, 0x1000, "JP 0x{nnn:03x}"),
    (0xF000, 0x2000, "CALL 0x{nnn:03x}"),
    (0xF000, 0x3000, "SE V{x:01x}, 0x{kk:02x}"),
    (0xF000, 0x4000, "SNE V{x:01x}, 0x{kk:02x}"),
    (0xF00F, 0x5000, "SE V{x:01x}, V{y:01x}"),
    (0xF000, 0x6000, "LD V{x:01x}, 0x{kk:02x}"),
    (0xF000, 0x7000, "ADD V{x:01x}, 0x{kk:02x}"),
    (0xF00F, 0x8000, "LD V{x:01x}, V{y:01x}"),
    (0xF00F, 0x8001, "OR V{x:01x}, V{y:01x}"),
    (0xF00F, 0x8002, "AND V{x:01x}, V{y:01x}"),
    (0xF00F, 0x8003, "XOR V{x:01x}, V{y:01x}"),
    (0xF00F, 0x8004, "ADD V{x:01x}, V{y:01x}"),
    (0xF00F, 0x8005, "SUB V{x:01x}, V{y:01x}"),
    (0xF00F, 0x8006, "SHR V{x:01x}"),
    (0xF00F, 0x8007, "SUBN V{x:01x}, V{y:01x}"),
    (0xF00F, 0x800E, "SHL V{x:01x}"),
    (0xF00F, 0x9000, "SNE V{x:01x}, V{y:01x}"),
    (0xF000, 0xA000, "LD I, 0x{nnn:03x}"),
    (0xF000, 0xB000, "JP V0, 0x{nnn:03x}"),
    (0xF000, 0xC000, "RND V{x:01x}, 0x{kk:02x}"),
    (0xF000, 0xD000, "DRW V{x:01x}, V{y:01x}, 0x{n:01x}"),
    (0xF0FF, 0xE09E, "SKP V{x:01x}"),
    (0xF0FF, 0xE0A1, "SKNP V{x:01x}"),
    (0xF0FF, 0xF007, "LD V{x:01x}, DT"),
    (0xF0FF, 0xF00A, "LD V{x:01x}, K"),
    (0xF0FF, 0xF015, "LD DT, V{x:01x}"),
    (0xF0FF, 0xF018, "LD ST, V{x:01x}"),
    (0xF0FF, 0xF01E, "ADD I, V{x:01x}"),
    (0xF0FF, 0xF029, "LD F, V{x:01x}"),
    (0xF0FF, 0xF033, "LD B, V{x:01x}"),
    (0xF0FF, 0xF055, "LD [I], V{x:01x}"),
    (0xF0FF, 0xF065, "LD V{x:01x}, [I]")
)


class Debugger:
    def __init__(self):
        self.live = False

    def disassemble(self, opcode):
        for bitmask, masked_opcode, mnemonic in MNEMONICS:
            if opcode & bitmask == masked_opcode:
                return mnemonic.format(
                    x=(opcode & 0xF00) >> 8, y=(opcode & 0xF0) >> 4, n=opcode & 0xF, kk=opcode & 0xFF,
                    nnn=opcode & 0xFFF
                )

        return "???"

    def debug(self, cpu, instruction, verbose=False):
        debug_str = (
            "V: 0x" + ("{:02x}" * 16) + " I: 0x{:04x} DT: 0x{:02x} DS: 0x{:02x} PC: 0x{:03x} OP: 0x{:04x} IN: {}"
        ).format(
            *[cpu.v[reg_num] for reg_num in range(15, -1, -1)] +
            [cpu.i, cpu.timers.get_delay(), cpu.timers.get_sound(), cpu.debug_pc, cpu.opcode, instruction]
        )

        if verbose:
            stack_items = cpu.stack.get_items()
            stack_str = (" 0x{:03x}" * len(stack_items)).format(*stack_items)
            debug_str += ("\nStack:{}").format(stack_str or " (Empty)")

            if cpu.awaiting_key:
                debug_str += "\nAwaiting keypress into V{:01x}".format(cpu.key_register)

        return debug_str

    def set_live(self, enabled):
        self.live = enabled

    def is_live(self):
        return self.live

    def output(self, cpu, instruction):
        print(self.debug(cpu, instruction))
