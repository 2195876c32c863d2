"""
Fetch ZIP archives and paginated JSON feeds over HTTP and turn them into tables.

Archives are fetched in their entirety, then their local file entries are walked in order and inflated, producing one
`ArchiveRow` (file name + content) per entry::

    from zipfeed import unzip_url

    for row in unzip_url('https://example.com/export.zip'):
        print(row.file_name, len(row.content or b''))

An entry that cannot be inflated (e.g. because it is stored rather than DEFLATE-compressed) still produces a row, but
with a content of None. A failed fetch or a truncated archive raises an exception and produces no rows at all.
"""

from zipfeed.assemble import ArchiveRow, archive_rows_to_table, assemble_archive_rows, unzip_bytes, unzip_url
from zipfeed.fetch import ByteSource, FetchError
from zipfeed.table import Table, TableSink


__version__ = '0.3.0'
