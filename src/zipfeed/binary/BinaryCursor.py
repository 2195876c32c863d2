"""
This module contains the `BinaryCursor` class, a forward-only positional reader over an in-memory buffer that offers
functions for extracting binary-encoded data such as ints, byte strings and structures.
"""

import struct

from typing import Union, Optional


class BinaryCursor:
    """
    This class wraps a byte buffer and a read position. Every read consumes bytes from the current position and
    advances it by exactly the amount consumed. There is no way to move the position backwards.

    All multi-byte ints are little-endian unless a `struct` format explicitly says otherwise.
    """

    _data: memoryview
    _position: int

    def __init__(self, data: Union[bytes, bytearray, memoryview], position: int = 0):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("Input to BinaryCursor must be a bytes-like object")
        if not (0 <= position <= len(data)):
            raise ValueError(f"Initial position {position} is outside the buffer (size: {len(data)})")

        self._data = memoryview(data)
        self._position = position

    def tell(self) -> int:
        return self._position

    def bytes_remaining(self) -> int:
        return len(self._data) - self._position

    def read_amount(self, n_bytes: int, meaning: Optional[str] = None) -> bytes:
        """
        Reads exactly `n_bytes` from the buffer.

        Args:
            n_bytes: The amount of bytes to read.
            meaning: An indication as to the meaning of the data being read (e.g. "file name"). It is used in the text
                of any exceptions that may be thrown.

        Returns:
            The data, as a `bytes` object `n_bytes` in length.

        Raises:
            BinaryCursorMissingDataError: If we are at the end of the buffer and no bytes are left at all.
            BinaryCursorReadPastEndError: If there are some bytes left, but fewer than `n_bytes`.

        The position is not advanced if an exception is raised.
        """

        if n_bytes < 0:
            raise ValueError("The number of bytes to read cannot be negative")
        if n_bytes == 0:
            return b''

        available = self.bytes_remaining()

        if available == 0:
            raise BinaryCursorMissingDataError(self._position, n_bytes, meaning)
        if available < n_bytes:
            raise BinaryCursorReadPastEndError(self._position, n_bytes, available, meaning)

        data = self._data[self._position:self._position + n_bytes].tobytes()
        self._position += n_bytes

        return data

    def read_struct(self, struct_format: str, meaning: Optional[str] = None) -> tuple:
        """
        Reads structured data from the buffer.

        Args:
            struct_format: The format of the structured data, as per the Python `struct` package. A little-endian
                specifier is prepended automatically unless one is already present.
            meaning: An indication as to the meaning of the data being read (e.g. "local header"). It is used in the
                text of any exceptions that may be thrown.

        Returns:
           The data in the structure, as a tuple.

        Raises:
            BinaryCursorMissingDataError: If we are at the end of the buffer and no bytes are left at all.
            BinaryCursorReadPastEndError: If there are some bytes left, but not enough for a complete structure.
        """

        if struct_format == '':
            return ()
        if struct_format[0] not in '@=<>!':
            struct_format = '<' + struct_format

        meaning = meaning or f"struct ({struct_format})"

        return struct.unpack(struct_format, self.read_amount(struct.calcsize(struct_format), meaning))

    def read_fixed_size_int(self, n_bytes: int, meaning: Optional[str] = None, signed: bool = False) -> int:
        if n_bytes < 1:
            raise ValueError("Number of bytes in int must be at least 1")

        return int.from_bytes(self.read_amount(n_bytes, meaning=meaning or 'int'), byteorder='little', signed=signed)

    def read_uint16(self, meaning: Optional[str] = None) -> int:
        return self.read_fixed_size_int(2, meaning=meaning or 'uint16')

    def read_uint32(self, meaning: Optional[str] = None) -> int:
        return self.read_fixed_size_int(4, meaning=meaning or 'uint32')


class BinaryCursorFormatError(Exception):
    """
    This is used by the `BinaryCursor` specifically to signal situations where the data does not match the expected
    format, i.e. a read that would run past the end of the buffer.
    """


class BinaryCursorReadPastEndError(BinaryCursorFormatError):
    position: int
    expected_length: int
    actual_length: int
    meaning: Optional[str]

    def __init__(self, position: int, expected_length: int, actual_length: int, meaning: Optional[str]):
        self.position = position
        self.expected_length = expected_length
        self.actual_length = actual_length
        self.meaning = meaning

        super().__init__(
            f"At position {position}, expected {expected_length} "
            f"bytes{f' for {meaning}' if meaning is not None else ''}"
            f", but only {actual_length} were found"
        )


class BinaryCursorMissingDataError(BinaryCursorFormatError):
    position: int
    expected_length: int
    meaning: Optional[str]

    def __init__(self, position: int, expected_length: int, meaning: Optional[str]):
        self.position = position
        self.expected_length = expected_length
        self.meaning = meaning

        super().__init__(
            f"At position {position}, expected {expected_length} "
            f"bytes{f' for {meaning}' if meaning is not None else ''}"
            f", but the data ends"
        )
