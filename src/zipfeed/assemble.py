"""
Turns the result of walking an archive into the rows that are handed to callers, and ties together fetching, parsing and
assembly for the top-level API.
"""

from dataclasses import dataclass, field
from logging import getLogger
from typing import Iterable, List, Optional

from zipfeed.fetch import ByteSource
from zipfeed.table import Table, TableSink
from zipfeed.zip.entries import DecodeFailure, ParsedEntry, iter_parsed_entries


logger = getLogger(__name__)


ARCHIVE_COLUMNS = ('file_name', 'content')


@dataclass(frozen=True)
class ArchiveRow:
    file_name: str
    content: Optional[bytes]
    # Why `content` is None, for reporting. Not part of the row's value.
    failure: Optional[DecodeFailure] = field(default=None, compare=False)


def assemble_archive_rows(entries: Iterable[ParsedEntry]) -> List[ArchiveRow]:
    """
    Keeps only the genuine entries (those with a valid signature) and projects each of them to an `ArchiveRow`. The
    extra field is dropped.

    The terminal entry is recognized by its flag, not by its position, so input that lacks it, or has it somewhere
    other than at the end, is still handled sensibly.
    """
    return [
        ArchiveRow(
            file_name=entry.name,
            content=entry.content,
            failure=entry.outcome if isinstance(entry.outcome, DecodeFailure) else None,
        )
        for entry in entries
        if entry.signature_valid
    ]


def archive_rows_to_table(rows: Iterable[ArchiveRow], sink: Optional[TableSink] = None) -> TableSink:
    if sink is None:
        sink = Table(ARCHIVE_COLUMNS)

    for row in rows:
        sink.append_row((row.file_name, row.content))

    return sink


def unzip_bytes(data: bytes, name_encoding: str = 'utf-8') -> List[ArchiveRow]:
    """
    Decodes the entries of an archive that is already in memory.

    Raises:
        BinaryCursorFormatError: If the archive is truncated or corrupt in a way that breaks the sequence of entries.
    """
    rows = assemble_archive_rows(iter_parsed_entries(data, name_encoding=name_encoding))

    logger.info(f"Decoded {len(rows)} entries from {len(data)} bytes of archive data")

    return rows


def unzip_url(url: str, source: Optional[ByteSource] = None, name_encoding: str = 'utf-8') -> List[ArchiveRow]:
    """
    Fetches an archive in its entirety and decodes its entries.

    Args:
        url: The location of the archive
        source: The `ByteSource` to fetch it with. A default one, with a throwaway session, is used if not provided.
        name_encoding: The encoding of entry names

    Raises:
        FetchError: If the archive could not be fetched. No rows are produced in this case.
        BinaryCursorFormatError: If the archive is truncated or corrupt.
    """
    if source is None:
        with ByteSource() as default_source:
            data = default_source.fetch_bytes(url)
    else:
        data = source.fetch_bytes(url)

    return unzip_bytes(data, name_encoding=name_encoding)
