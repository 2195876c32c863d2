import unittest

from unittest import mock

from archive_builders import local_entry, CENTRAL_DIRECTORY_STUB

from zipfeed import ArchiveRow, Table, unzip_bytes, unzip_url
from zipfeed.assemble import assemble_archive_rows, archive_rows_to_table
from zipfeed.fetch import ByteSource, FetchError
from zipfeed.zip.entries import ParsedEntry, DecodedContent, DecodeFailureReason


class AssembleArchiveRowsTest(unittest.TestCase):
    def test_drops_terminal_entry(self):
        entries = [
            ParsedEntry(True, 0, name='a', extra=b'xx', outcome=DecodedContent(b'1')),
            ParsedEntry(True, 40, name='b', extra=b'', outcome=None),
            ParsedEntry(False, 80),
        ]

        self.assertEqual(
            assemble_archive_rows(entries),
            [ArchiveRow('a', b'1'), ArchiveRow('b', None)]
        )

    def test_only_terminal(self):
        self.assertEqual(assemble_archive_rows([ParsedEntry(False, 0)]), [])

    def test_filters_by_flag_not_position(self):
        entries = [ParsedEntry(True, 0, name='a', outcome=DecodedContent(b'1'))]

        self.assertEqual(assemble_archive_rows(entries), [ArchiveRow('a', b'1')])

    def test_to_table(self):
        table = archive_rows_to_table([ArchiveRow('a', b'1'), ArchiveRow('b', None)])

        self.assertEqual(table.columns, ('file_name', 'content'))
        self.assertEqual(table.rows, [('a', b'1'), ('b', None)])


class UnzipTest(unittest.TestCase):
    def test_end_to_end_example(self):
        rows = unzip_bytes(local_entry('a.txt', b'hello') + b'\xde\xad\xbe\xef')

        self.assertEqual(rows, [ArchiveRow(file_name='a.txt', content=b'hello')])

    def test_empty_archive(self):
        self.assertEqual(unzip_bytes(CENTRAL_DIRECTORY_STUB), [])

    def test_row_keeps_decode_failure(self):
        data = local_entry('plain.txt', b'hello', method=0) + local_entry('a.txt', b'hi') + CENTRAL_DIRECTORY_STUB

        rows = unzip_bytes(data)

        self.assertEqual(rows, [ArchiveRow('plain.txt', None), ArchiveRow('a.txt', b'hi')])
        self.assertEqual(rows[0].failure.reason, DecodeFailureReason.UNSUPPORTED_METHOD)
        self.assertIsNone(rows[1].failure)

    def test_row_count_matches_entry_count(self):
        data = b''.join(local_entry(f'f{i}.txt', b'x' * i) for i in range(5)) + CENTRAL_DIRECTORY_STUB

        rows = unzip_bytes(data)

        self.assertEqual(len(rows), 5)
        self.assertEqual(rows[3], ArchiveRow('f3.txt', b'xxx'))

    def test_unzip_url_uses_source(self):
        source = mock.Mock(spec=ByteSource)
        source.fetch_bytes.return_value = local_entry('a.txt', b'hello') + CENTRAL_DIRECTORY_STUB

        rows = unzip_url('https://example.com/a.zip', source=source)

        source.fetch_bytes.assert_called_once_with('https://example.com/a.zip')
        self.assertEqual(rows, [ArchiveRow('a.txt', b'hello')])

    def test_fetch_error_propagates(self):
        source = mock.Mock(spec=ByteSource)
        source.fetch_bytes.side_effect = FetchError('https://example.com/a.zip', '503 Server Error')

        with self.assertRaises(FetchError):
            unzip_url('https://example.com/a.zip', source=source)

    def test_table_export(self):
        self.assertIsInstance(archive_rows_to_table([]), Table)
