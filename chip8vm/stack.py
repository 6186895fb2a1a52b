#!/usr/bin/env python3

"""
Stack Emulator

There is no stack pointer register exposed to the running program, and no
documented location for the stack in RAM, so the call stack is kept in host
memory as a plain list of return addresses.  Keeping it out of RAM also means a
runaway program can't corrupt its own return addresses.

The depth is fixed at 16 levels.  Going beyond that (or returning with nothing
to return to) is fatal.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_SIZE
from .errors import Chip8Error


class StackOverflow(Chip8Error):
    pass


class StackUnderflow(Chip8Error):
    pass


class Stack:
    def __init__(self, size=STACK_SIZE):
        self.items = []
        self.size = size

    def __len__(self):
        return len(self.items)

    def push(self, item):
        if len(self.items) >= self.size:
            raise StackOverflow("Stack overflow: more than {} nested subroutine calls".format(self.size))

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackUnderflow("Stack underflow: return with no subroutine call in progress") from None

    def get_items(self):
        # For debugging
        return self.items
