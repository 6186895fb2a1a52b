#!/usr/bin/env python3

"""
Memory Emulator

A flat 4K block of RAM.  Supports reading and writing of individual bytes or
blocks, and loading of the system font and program binaries.

Every access is bounds-checked.  Nothing is clamped or wrapped: a program that
reaches outside the address space has gone wrong, and emulation should stop
rather than carry on with a guessed address.  Multi-byte accesses are checked
in full before anything is written, so a failed access never leaves a partial
update behind.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEM_SIZE
from .errors import Chip8Error


class OutOfBounds(Chip8Error):
    pass


class ProgramTooLarge(Chip8Error):
    pass


class Memory:
    def __init__(self, mem_size=MEM_SIZE):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read_byte(self, location):
        self.check_range(location)
        return self.mem[location]

    def read_block(self, location, size):
        self.check_range(location, size)
        # Copy out, so the caller can't alter RAM through the slice
        return bytes(self.mem[location:location + size])

    def write_byte(self, location, byte):
        self.check_range(location)
        self.mem[location] = byte & 0xFF

    def write_block(self, location, block):
        block_size = len(block)
        self.check_range(location, block_size)
        self.mem[location:location + block_size] = bytes(block)

    def load(self, block, location):
        # Same as a block write, except a block running off the end is reported as being too large to fit
        self.check_range(location)

        if location + len(block) > self.mem_size:
            raise ProgramTooLarge(
                "{} bytes loaded at 0x{:03x} would exceed the top of memory (0x{:03x})".format(
                    len(block), location, self.mem_top
                )
            )

        self.write_block(location, block)

    def check_range(self, location, size=1):
        if location < 0 or location + max(size, 1) - 1 > self.mem_top:
            raise OutOfBounds(
                "Memory access of {} byte(s) at 0x{:04x} is outside 0x000-0x{:03x}".format(
                    size, location, self.mem_top
                )
            )

    def clear(self):
        self.mem[:] = bytes(self.mem_size)
