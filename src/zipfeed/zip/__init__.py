"""
Decoding of ZIP local file entries from an in-memory buffer.

Only the sequence of local file headers at the start of an archive is walked. The central directory is never decoded;
its signature simply ends the walk, as does any other value that is not a local file header signature.
"""

import zlib

from enum import IntEnum


LOCAL_FILE_HEADER_MAGIC = 0x04034B50
"""Signature that starts every local file header (``PK\\x03\\x04`` on disk)"""


class ZipCompressionMethod(IntEnum):
    STORE = 0
    SHRINK = 1
    REDUCE1 = 2
    REDUCE2 = 3
    REDUCE3 = 4
    REDUCE4 = 5
    IMPLODE = 6
    TOKENIZE = 7
    DEFLATE = 8
    DEFLATE64 = 9
    DCL_IMPLODE = 10
    BZIP2 = 12
    LZMA = 14
    ZSTANDARD = 93
    XZ = 95
    PPMD = 98
    AE_X_ENCRYPTION = 99


def inflate_raw(data: bytes) -> bytes:
    """
    Decompress a raw DEFLATE stream (no zlib or gzip wrapper), as found in ZIP entries.

    Raises:
        zlib.error: If the data is not a complete, valid DEFLATE stream.
    """
    decompressor = zlib.decompressobj(-zlib.MAX_WBITS)
    result = decompressor.decompress(data)

    if not decompressor.eof:
        raise zlib.error("Incomplete or truncated DEFLATE stream")

    return result
