import struct
import zlib

from io import BytesIO
from typing import Iterable, Optional, Tuple
from zipfile import ZipFile


CENTRAL_DIRECTORY_STUB = b'PK\x01\x02' + bytes(42)


def deflate_raw(data: bytes) -> bytes:
    compressor = zlib.compressobj(9, zlib.DEFLATED, -zlib.MAX_WBITS)
    return compressor.compress(data) + compressor.flush()


def local_entry(
    name: str, payload: bytes, method: int = 8, extra: bytes = b'', uncompressed_size: Optional[int] = None,
    content: Optional[bytes] = None,
) -> bytes:
    """
    Builds one local file entry. By default `payload` is deflated; pass `content` to store arbitrary bytes instead.
    """
    if content is None:
        content = deflate_raw(payload) if method == 8 else payload
    if uncompressed_size is None:
        uncompressed_size = len(payload)

    name_bytes = name.encode('utf-8')
    opaque = struct.pack('<HHHHHI', 20, 0, method, 0, 0, zlib.crc32(payload))

    return (
        struct.pack('<I', 0x04034B50) + opaque +
        struct.pack('<IIHH', len(content), uncompressed_size, len(name_bytes), len(extra)) +
        name_bytes + extra + content
    )


def zipfile_archive(entries: Iterable[Tuple[str, bytes]], compression: int) -> bytes:
    buffer = BytesIO()

    with ZipFile(buffer, 'w', compression=compression) as zf:
        for name, data in entries:
            zf.writestr(name, data)

    return buffer.getvalue()
