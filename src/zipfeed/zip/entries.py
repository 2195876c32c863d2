"""
Decoding of complete local file entries and the walk over the sequence of entries in an archive buffer.
"""

import zlib

from dataclasses import dataclass
from enum import Enum
from logging import getLogger
from typing import Iterator, List, Optional, Tuple, Union

from zipfeed.binary.BinaryCursor import BinaryCursor
from zipfeed.zip import ZipCompressionMethod, inflate_raw
from zipfeed.zip.local_header import LocalEntryHeader, read_local_entry_header


logger = getLogger(__name__)


class DecodeFailureReason(Enum):
    UNSUPPORTED_METHOD = 'unsupported-method'
    CORRUPT_DATA = 'corrupt-data'


@dataclass(frozen=True)
class DecodedContent:
    data: bytes


@dataclass(frozen=True)
class DecodeFailure:
    reason: DecodeFailureReason
    detail: str

    @property
    def data(self) -> None:
        return None


EntryContent = Union[DecodedContent, DecodeFailure]


@dataclass(frozen=True)
class ParsedEntry:
    """
    One step of the walk over the archive.

    An entry with `signature_valid` False is the terminal entry: only its 4-byte signature was consumed and all the
    other fields are None.
    """
    signature_valid: bool
    offset: int
    header: Optional[LocalEntryHeader] = None
    name: Optional[str] = None
    extra: Optional[bytes] = None
    outcome: Optional[EntryContent] = None

    @property
    def content(self) -> Optional[bytes]:
        return None if self.outcome is None else self.outcome.data

    @property
    def is_terminal(self) -> bool:
        return not self.signature_valid


class ParserState(Enum):
    READING = 'reading'
    TERMINATED = 'terminated'


def decode_entry_body(
    cursor: BinaryCursor, header: LocalEntryHeader, name_encoding: str = 'utf-8'
) -> Tuple[str, bytes, EntryContent]:
    """
    Reads the variable-length part of an entry whose header has just been read: the name, the extra field and the
    compressed data, in this order. The data is then inflated.

    Inflation is always attempted as raw DEFLATE, whatever method the header declares. A failure does not raise; it is
    returned as a `DecodeFailure`, labelled according to the method declared in the header.

    Raises:
        BinaryCursorFormatError: If the buffer is shorter than the lengths declared in the header.
    """

    name = cursor.read_amount(header.name_len, 'file name').decode(name_encoding, errors='surrogateescape')
    extra = cursor.read_amount(header.extra_len, 'extra field')
    compressed = cursor.read_amount(header.compressed_size, 'compressed data')

    return name, extra, _inflate_entry_data(name, header, compressed)


def _inflate_entry_data(name: str, header: LocalEntryHeader, compressed: bytes) -> EntryContent:
    try:
        data = inflate_raw(compressed)
    except zlib.error as e:
        method = header.compression_method_hint
        reason = DecodeFailureReason.CORRUPT_DATA \
            if method == ZipCompressionMethod.DEFLATE else DecodeFailureReason.UNSUPPORTED_METHOD

        logger.debug(f"Could not inflate entry {name!r} (method {_describe_method(method)}): {e}")

        return DecodeFailure(reason, f"{_describe_method(method)}: {e}")

    if len(data) != header.uncompressed_size:
        logger.warning(
            f"Entry {name!r} inflated to {len(data)} bytes, but its header declares {header.uncompressed_size}"
        )

    return DecodedContent(data)


def _describe_method(method: int) -> str:
    try:
        return ZipCompressionMethod(method).name
    except ValueError:
        return str(method)


def iter_parsed_entries(data: bytes, name_encoding: str = 'utf-8') -> Iterator[ParsedEntry]:
    """
    Walks the local file entries at the start of an archive buffer, in archive order.

    The walk ends at the first 4-byte value that is not a local file header signature (normally the first central
    directory record). A terminal entry (with `signature_valid` False) is yielded for it, exactly once, as the last
    item. Any interleaved non-standard records therefore end the walk early.

    Raises:
        BinaryCursorFormatError: If the buffer is truncated, i.e. it ends where a signature or a declared field is
            expected. This aborts the walk as a whole.
    """

    cursor = BinaryCursor(data)
    state = ParserState.READING

    while state == ParserState.READING:
        offset = cursor.tell()
        header = read_local_entry_header(cursor)

        if header is None:
            logger.debug(f"End of local entries at offset {offset}")
            state = ParserState.TERMINATED
            yield ParsedEntry(signature_valid=False, offset=offset)
            continue

        name, extra, outcome = decode_entry_body(cursor, header, name_encoding=name_encoding)
        logger.debug(f"Entry {name!r} at offset {offset}: {header.compressed_size} bytes compressed")

        yield ParsedEntry(
            signature_valid=True,
            offset=offset,
            header=header,
            name=name,
            extra=extra,
            outcome=outcome,
        )


def parse_entry_stream(data: bytes, name_encoding: str = 'utf-8') -> List[ParsedEntry]:
    """
    Like `iter_parsed_entries`, but returns all the entries at once. The last one is always the terminal entry.
    """
    return list(iter_parsed_entries(data, name_encoding=name_encoding))
