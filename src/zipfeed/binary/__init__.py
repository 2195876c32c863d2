"""
Utilities for parsing binary data held entirely in memory.

The main offering is the `BinaryCursor` class, a forward-only reader over a byte buffer that extracts little-endian
ints, fixed-length byte strings and structures, while keeping track of its position for use in error messages.
"""
