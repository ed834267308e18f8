import unittest

from dataclasses import FrozenInstanceError

from atmfjstc.lib.gmad_file import GmadAuthor, GmadFileEntry, GmadHeader


def _make_header(**kwargs) -> GmadHeader:
    params = dict(
        author=GmadAuthor(name='Bob', steam_id64=123),
        description='Desc',
        files=[
            GmadFileEntry(path='a.txt', crc=1, offset=100, size=5),
            GmadFileEntry(path='b.txt', crc=2, offset=105, size=7),
        ],
        format_version=3,
        name='Test',
        timestamp=456,
        version=1,
        files_offset=100,
    )
    params.update(kwargs)

    return GmadHeader(**params)


class GmadAuthorTest(unittest.TestCase):
    def test_equality(self):
        self.assertEqual(GmadAuthor('Bob', 1), GmadAuthor(name='Bob', steam_id64=1))
        self.assertNotEqual(GmadAuthor('Bob', 1), GmadAuthor('Bob', 2))
        self.assertNotEqual(GmadAuthor('Bob', 1), GmadAuthor('Alice', 1))

    def test_hash(self):
        self.assertEqual(hash(GmadAuthor('Bob', 1)), hash(GmadAuthor('Bob', 1)))
        self.assertEqual(len({GmadAuthor('Bob', 1), GmadAuthor('Bob', 1), GmadAuthor('Bob', 0)}), 2)

    def test_empty_name_allowed(self):
        self.assertEqual(GmadAuthor('', 0).name, '')

    def test_none_name(self):
        with self.assertRaises(TypeError):
            GmadAuthor(None, 0)

    def test_immutable(self):
        author = GmadAuthor('Bob', 1)

        with self.assertRaises(FrozenInstanceError):
            author.name = 'Alice'


class GmadFileEntryTest(unittest.TestCase):
    def test_equality(self):
        self.assertEqual(GmadFileEntry('a', 1, 10, 5), GmadFileEntry(path='a', crc=1, offset=10, size=5))
        self.assertNotEqual(GmadFileEntry('a', 1, 10, 5), GmadFileEntry('a', 2, 10, 5))
        self.assertNotEqual(GmadFileEntry('a', 1, 10, 5), GmadFileEntry('a', 1, 11, 5))

    def test_end_offset(self):
        self.assertEqual(GmadFileEntry('a', 0, 10, 5).end_offset, 15)

    def test_none_path(self):
        with self.assertRaises(TypeError):
            GmadFileEntry(None, 0, 0, 0)

    def test_negative_size(self):
        with self.assertRaises(ValueError):
            GmadFileEntry('a', 0, 0, -1)

    def test_negative_offset(self):
        with self.assertRaises(ValueError):
            GmadFileEntry('a', 0, -1, 0)

    def test_immutable(self):
        entry = GmadFileEntry('a', 0, 0, 0)

        with self.assertRaises(FrozenInstanceError):
            entry.offset = 5


class GmadHeaderTest(unittest.TestCase):
    def test_files_frozen_to_tuple(self):
        header = _make_header()

        self.assertIsInstance(header.files, tuple)
        self.assertEqual(header.files[1].path, 'b.txt')

    def test_files_from_generator(self):
        header = _make_header(files=(GmadFileEntry(str(i), 0, 100 + i, 1) for i in range(3)))

        self.assertEqual([entry.path for entry in header.files], ['0', '1', '2'])

    def test_equality_and_hash(self):
        self.assertEqual(_make_header(), _make_header())
        self.assertEqual(hash(_make_header()), hash(_make_header()))
        self.assertNotEqual(_make_header(), _make_header(version=2))
        self.assertNotEqual(_make_header(), _make_header(files=[]))

    def test_immutable(self):
        header = _make_header()

        with self.assertRaises(FrozenInstanceError):
            header.name = 'Other'

    def test_none_fields(self):
        for field_name in ('name', 'description', 'files'):
            with self.assertRaises(TypeError, msg=field_name):
                _make_header(**{field_name: None})

    def test_total_size(self):
        self.assertEqual(_make_header().total_size, 112)
        self.assertEqual(_make_header(files=[]).total_size, 100)

    def test_find_file(self):
        header = _make_header()

        self.assertEqual(header.find_file('b.txt'), header.files[1])
        self.assertIsNone(header.find_file('B.TXT'))
        self.assertIsNone(header.find_file('c.txt'))


if __name__ == '__main__':
    unittest.main()
