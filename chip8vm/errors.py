#!/usr/bin/env python3

"""
Base Error

Every fatal condition raised by the emulated machine derives from Chip8Error,
so the front end can report any of them without knowing which component
failed.  The specific error types are defined alongside the component that
raises them.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Chip8Error(Exception):
    pass
