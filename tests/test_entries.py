import unittest

from zipfile import ZIP_DEFLATED, ZIP_STORED

from archive_builders import local_entry, deflate_raw, zipfile_archive, CENTRAL_DIRECTORY_STUB

from zipfeed.binary.BinaryCursor import BinaryCursorFormatError, BinaryCursorMissingDataError
from zipfeed.zip.entries import parse_entry_stream, iter_parsed_entries, DecodedContent, DecodeFailure, \
    DecodeFailureReason


class ParseEntryStreamTest(unittest.TestCase):
    def test_single_entry(self):
        entries = parse_entry_stream(local_entry('a.txt', b'hello') + b'\x00\x00\x00\x00')

        self.assertEqual(len(entries), 2)
        self.assertTrue(entries[0].signature_valid)
        self.assertEqual(entries[0].name, 'a.txt')
        self.assertEqual(entries[0].content, b'hello')
        self.assertEqual(entries[0].outcome, DecodedContent(b'hello'))
        self.assertEqual(entries[0].extra, b'')
        self.assertFalse(entries[1].signature_valid)
        self.assertIsNone(entries[1].name)
        self.assertIsNone(entries[1].content)

    def test_empty_archive(self):
        entries = parse_entry_stream(CENTRAL_DIRECTORY_STUB)

        self.assertEqual(len(entries), 1)
        self.assertTrue(entries[0].is_terminal)
        self.assertEqual(entries[0].offset, 0)

    def test_second_entry_offset(self):
        first = local_entry('first.txt', b'some text ' * 10, extra=b'\xaa\xbb\x04\x00abcd')
        second = local_entry('b', b'other')
        entries = parse_entry_stream(first + second + CENTRAL_DIRECTORY_STUB)

        header = entries[0].header
        self.assertEqual(entries[1].offset, 30 + header.name_len + header.extra_len + header.compressed_size)
        self.assertEqual(entries[1].offset, len(first))
        self.assertEqual(entries[0].extra, b'\xaa\xbb\x04\x00abcd')
        self.assertEqual(entries[1].content, b'other')
        self.assertEqual(entries[2].offset, len(first) + len(second))

    def test_stored_entry_has_no_content(self):
        entries = parse_entry_stream(local_entry('plain.txt', b'hello', method=0) + CENTRAL_DIRECTORY_STUB)

        self.assertTrue(entries[0].signature_valid)
        self.assertEqual(entries[0].name, 'plain.txt')
        self.assertIsNone(entries[0].content)
        self.assertIsInstance(entries[0].outcome, DecodeFailure)
        self.assertEqual(entries[0].outcome.reason, DecodeFailureReason.UNSUPPORTED_METHOD)

    def test_corrupt_deflate_entry(self):
        entries = parse_entry_stream(
            local_entry('bad.bin', b'hello', content=b'\xff\xff\xff\xff') + CENTRAL_DIRECTORY_STUB
        )

        self.assertEqual(entries[0].name, 'bad.bin')
        self.assertIsNone(entries[0].content)
        self.assertEqual(entries[0].outcome.reason, DecodeFailureReason.CORRUPT_DATA)

    def test_truncated_deflate_stream_is_corrupt(self):
        compressed = deflate_raw(bytes(range(256)) * 4)
        entries = parse_entry_stream(
            local_entry('cut.bin', b'', content=compressed[:len(compressed) // 2]) + CENTRAL_DIRECTORY_STUB
        )

        self.assertEqual(entries[0].outcome.reason, DecodeFailureReason.CORRUPT_DATA)

    def test_failure_does_not_stop_the_walk(self):
        data = local_entry('plain.txt', b'abc', method=0) + local_entry('z.txt', b'zzz') + CENTRAL_DIRECTORY_STUB
        entries = parse_entry_stream(data)

        self.assertEqual([entry.name for entry in entries], ['plain.txt', 'z.txt', None])
        self.assertEqual(entries[1].content, b'zzz')

    def test_truncated_content_is_fatal(self):
        data = local_entry('a.txt', b'hello world')

        with self.assertRaises(BinaryCursorFormatError):
            parse_entry_stream(data[:-3])

    def test_missing_end_signature_is_fatal(self):
        with self.assertRaises(BinaryCursorMissingDataError):
            parse_entry_stream(local_entry('a.txt', b'hello'))

    def test_size_mismatch_is_logged(self):
        with self.assertLogs('zipfeed.zip.entries', level='WARNING') as cm:
            entries = parse_entry_stream(local_entry('a.txt', b'hello', uncompressed_size=99) + CENTRAL_DIRECTORY_STUB)

        self.assertEqual(entries[0].content, b'hello')
        self.assertIn('a.txt', cm.output[0])

    def test_interleaved_record_ends_walk(self):
        data = local_entry('a', b'1') + b'PK\x07\x08' + bytes(12) + local_entry('b', b'2') + CENTRAL_DIRECTORY_STUB
        entries = parse_entry_stream(data)

        self.assertEqual([entry.signature_valid for entry in entries], [True, False])

    def test_non_utf8_name_does_not_fail(self):
        entry = local_entry('x', b'data')
        entry = entry[:30] + b'\xe9' + entry[31:]
        entries = parse_entry_stream(entry + CENTRAL_DIRECTORY_STUB)

        self.assertEqual(entries[0].name.encode('utf-8', errors='surrogateescape'), b'\xe9')

    def test_iteration_is_lazy(self):
        entries = iter_parsed_entries(local_entry('a', b'1') + b'garbage!')

        self.assertEqual(next(entries).name, 'a')
        self.assertTrue(next(entries).is_terminal)
        with self.assertRaises(StopIteration):
            next(entries)


class RealArchivesTest(unittest.TestCase):
    FILES = [
        ('readme.txt', b'Read me first.\n' * 20),
        ('data/values.csv', b'a,b,c\n1,2,3\n4,5,6\n'),
        ('empty.txt', b''),
    ]

    def test_deflated_archive(self):
        entries = parse_entry_stream(zipfile_archive(self.FILES, ZIP_DEFLATED))
        genuine = [entry for entry in entries if entry.signature_valid]

        self.assertEqual(len(genuine), len(self.FILES))
        self.assertEqual([(entry.name, entry.content) for entry in genuine], self.FILES)

        for entry in genuine:
            self.assertEqual(len(entry.content), entry.header.uncompressed_size)

    def test_stored_archive(self):
        entries = parse_entry_stream(zipfile_archive([('s.txt', b'hello, stored data')], ZIP_STORED))

        self.assertEqual(len(entries), 2)
        self.assertEqual(entries[0].name, 's.txt')
        self.assertIsNone(entries[0].content)
        self.assertEqual(entries[0].outcome.reason, DecodeFailureReason.UNSUPPORTED_METHOD)
