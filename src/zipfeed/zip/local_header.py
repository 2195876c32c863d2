"""
Reading of the fixed-layout part of a ZIP local file header.

Layout, relative to the start of the entry (all ints little-endian)::

    offset  size  field
         0     4  signature (0x04034B50)
         4    14  version needed, flags, method, mod. time, mod. date, CRC-32 (kept opaque)
        18     4  compressed size
        22     4  uncompressed size
        26     2  file name length
        28     2  extra field length
        30     -  file name, extra field, compressed data (variable, see `entries`)
"""

from dataclasses import dataclass
from typing import Optional

from zipfeed.binary.BinaryCursor import BinaryCursor
from zipfeed.zip import LOCAL_FILE_HEADER_MAGIC


LOCAL_HEADER_OPAQUE_SIZE = 14
LOCAL_HEADER_FIXED_SIZE = 26
"""Size of the fixed part of the header following the signature"""

LOCAL_HEADER_TOTAL_SIZE = 4 + LOCAL_HEADER_FIXED_SIZE


@dataclass(frozen=True)
class LocalEntryHeader:
    opaque_block: bytes
    compressed_size: int
    uncompressed_size: int
    name_len: int
    extra_len: int

    @property
    def compression_method_hint(self) -> int:
        """
        The compression method code stored in the opaque block. It is informative only and never selects the
        decompressor.
        """
        return int.from_bytes(self.opaque_block[4:6], byteorder='little')


def read_local_entry_header(cursor: BinaryCursor) -> Optional[LocalEntryHeader]:
    """
    Reads a local file header at the current cursor position.

    Returns:
        The header, or None if the 4-byte signature is anything other than a local file header signature. In the
        latter case only the signature has been consumed. This is the normal way for the sequence of local entries to
        end, not an error.

    Raises:
        BinaryCursorFormatError: If the buffer ends before the signature or the fixed part of the header is complete.
    """

    signature = cursor.read_uint32('local header signature')
    if signature != LOCAL_FILE_HEADER_MAGIC:
        return None

    opaque_block, compressed_size, uncompressed_size, name_len, extra_len = cursor.read_struct(
        f'{LOCAL_HEADER_OPAQUE_SIZE}sIIHH', 'local header'
    )

    return LocalEntryHeader(
        opaque_block=opaque_block,
        compressed_size=compressed_size,
        uncompressed_size=uncompressed_size,
        name_len=name_len,
        extra_len=extra_len,
    )
