"""
Filesystem Tests

Run with: python -m pytest memfs/tests -v
"""

import unittest
from datetime import datetime

from memfs.core.config_loader import FilesystemConfig
from memfs.exceptions import (
    FileSystemException,
    ReadOnlyError,
    WriteOnlyError,
    TooLargeError,
    NotExistError,
    ExistError,
    IsDirectoryError,
    NotDirectoryError,
)
from memfs.filesystem.file import MemoryFile, ReadOnlyFile, WriteOnlyFile
from memfs.filesystem.flags import OpenFlag, Whence
from memfs.filesystem.node import DirectoryNode, FileNode
from memfs.filesystem.vfs import MemoryFilesystem


HELLO = b"Hello world!"
BYE = b"Bye world"
LOREM = b"Lorem ipsum dolor sit amet, consectetur adipiscing elit."


def read_all(fs: MemoryFilesystem, path: str) -> bytes:
    with fs.open(path) as f:
        return f.read()


class TestMemoryFilesystem(unittest.TestCase):
    """Test filesystem construction."""

    def test_root(self):
        """A new filesystem has an empty root directory named '/'."""
        fs = MemoryFilesystem(FilesystemConfig())

        self.assertIsInstance(fs.root, DirectoryNode)
        self.assertEqual(fs.root.name, '/')
        self.assertEqual(fs.listdir('/'), [])

    def test_instances_are_independent(self):
        """Two filesystems share nothing."""
        a = MemoryFilesystem(FilesystemConfig())
        b = MemoryFilesystem(FilesystemConfig())
        a.mkdir('/tmp')

        self.assertTrue(a.exists('/tmp'))
        self.assertFalse(b.exists('/tmp'))


class TestMkdir(unittest.TestCase):
    """Test directory creation."""

    def setUp(self):
        self.fs = MemoryFilesystem(FilesystemConfig())

    def test_mkdir(self):
        """Nested directories are created under existing parents."""
        paths = ['/tmp', '/tmp/foo', '/tmp/bar', '/etc']
        for path in paths:
            self.fs.mkdir(path, 0o755)

        for path in paths:
            info = self.fs.stat(path)
            self.assertTrue(info.is_dir)
            self.assertEqual(info.mode, 0o755)

        self.assertEqual(self.fs.listdir('/tmp'), ['bar', 'foo'])

    def test_mkdir_twice(self):
        """Creating the same directory twice fails with ExistError."""
        self.fs.mkdir('/tmp')

        with self.assertRaises(ExistError) as ctx:
            self.fs.mkdir('/tmp')

        self.assertEqual(ctx.exception.operation, 'mkdir')
        self.assertEqual(ctx.exception.path, '/tmp')

    def test_mkdir_missing_parent(self):
        """A missing parent fails with NotExistError."""
        with self.assertRaises(NotExistError) as ctx:
            self.fs.mkdir('/home/abiee')

        self.assertEqual(ctx.exception.operation, 'mkdir')
        self.assertEqual(str(ctx.exception), 'mkdir /home/abiee: file does not exist')

    def test_mkdir_under_file(self):
        """A file in the middle of the path counts as missing."""
        self.fs.create('/foo.txt').close()

        with self.assertRaises(NotExistError):
            self.fs.mkdir('/foo.txt/sub')

    def test_mkdir_over_file(self):
        """A directory cannot replace a file."""
        self.fs.create('/foo.txt').close()

        with self.assertRaises(ExistError):
            self.fs.mkdir('/foo.txt')

    def test_mkdir_root(self):
        """The root always exists."""
        with self.assertRaises(ExistError):
            self.fs.mkdir('/')

    def test_default_mode(self):
        """mkdir without a mode uses the configured default."""
        fs = MemoryFilesystem(FilesystemConfig(default_dir_mode=0o700))
        fs.mkdir('/private')

        self.assertEqual(fs.stat('/private').mode, 0o700)


class TestCreate(unittest.TestCase):
    """Test Create."""

    def setUp(self):
        self.fs = MemoryFilesystem(FilesystemConfig())

    def test_create(self):
        """create makes an empty read-write file with mode 0o666."""
        f = self.fs.create('/foo.txt')

        self.assertIsInstance(f, MemoryFile)
        self.assertEqual(f.name, '/foo.txt')

        info = self.fs.stat('/foo.txt')
        self.assertFalse(info.is_dir)
        self.assertEqual(info.mode, 0o666)
        self.assertEqual(info.size, 0)
        f.close()

    def test_create_truncates(self):
        """create on an existing file discards its content."""
        with self.fs.create('/foo.txt') as f:
            f.write(LOREM)

        with self.fs.create('/foo.txt') as f:
            f.write(b'foo')

        self.assertEqual(read_all(self.fs, '/foo.txt'), b'foo')

    def test_create_over_directory(self):
        """create on a directory fails with IsDirectoryError."""
        self.fs.mkdir('/tmp')

        with self.assertRaises(IsDirectoryError) as ctx:
            self.fs.create('/tmp')

        self.assertEqual(ctx.exception.operation, 'open')
        self.assertTrue(self.fs.is_dir('/tmp'))

    def test_create_in_missing_directory(self):
        """create under a missing directory fails with NotExistError."""
        with self.assertRaises(NotExistError):
            self.fs.create('/etc/foo.txt')

    def test_create_nested(self):
        """Files can be created at any depth below existing directories."""
        self.fs.mkdir('/a')
        self.fs.mkdir('/a/b')

        with self.fs.create('/a/b/c.txt') as f:
            f.write(HELLO)

        self.assertEqual(read_all(self.fs, '/a/b/c.txt'), HELLO)
        self.assertEqual(self.fs.stat('/a/b/c.txt').name, 'c.txt')


class TestOpen(unittest.TestCase):
    """Test Open."""

    def setUp(self):
        self.fs = MemoryFilesystem(FilesystemConfig())
        self.fs.create('/foo.txt').close()
        self.fs.mkdir('/tmp')

    def test_open_read_only(self):
        """open returns a read-only handle named after the path."""
        f = self.fs.open('/foo.txt')

        self.assertIsInstance(f, ReadOnlyFile)
        self.assertEqual(f.name, '/foo.txt')
        with self.assertRaises(ReadOnlyError):
            f.write(b'error')

    def test_open_errors(self):
        """Directories and missing files cannot be opened."""
        cases = [
            ('/tmp', IsDirectoryError),
            ('/bar.txt', NotExistError),
            ('/tmp/foo.txt', NotExistError),
            ('/etc/foo.txt', NotExistError),
        ]

        for path, error in cases:
            with self.assertRaises(error) as ctx:
                self.fs.open(path)
            self.assertEqual(ctx.exception.operation, 'open')
            self.assertEqual(ctx.exception.path, path)

    def test_open_root(self):
        """The root is a directory."""
        with self.assertRaises(IsDirectoryError):
            self.fs.open('/')

    def test_open_relative_path(self):
        """Relative paths do not resolve."""
        with self.assertRaises(NotExistError):
            self.fs.open('foo.txt')


class TestOpenFile(unittest.TestCase):
    """Test OpenFile flag handling."""

    def setUp(self):
        self.fs = MemoryFilesystem(FilesystemConfig())
        self.fs.create('/foo.txt').close()

    def test_write_only(self):
        """WRONLY writes from offset 0 and refuses reads."""
        f = self.fs.open_file('/foo.txt', OpenFlag.WRONLY)

        self.assertIsInstance(f, WriteOnlyFile)
        self.assertEqual(f.write(LOREM), len(LOREM))
        with self.assertRaises(WriteOnlyError):
            f.read(10)
        self.assertEqual(f.tell(), len(LOREM))
        f.close()

        self.assertEqual(read_all(self.fs, '/foo.txt'), LOREM)

    def test_read_only(self):
        """RDONLY reads and refuses writes."""
        with self.fs.create('/foo.txt') as f:
            f.write(LOREM)

        f = self.fs.open_file('/foo.txt', OpenFlag.RDONLY)
        self.assertEqual(f.read(5), LOREM[:5])
        with self.assertRaises(ReadOnlyError):
            f.write(b'error')
        self.assertEqual(f.tell(), 5)

    def test_read_write(self):
        """RDWR gives the bare handle."""
        with self.fs.create('/foo.txt') as f:
            f.write(HELLO)

        f = self.fs.open_file('/foo.txt', OpenFlag.RDWR)
        self.assertIsInstance(f, MemoryFile)
        self.assertEqual(f.read(5), b'Hello')
        f.write(b', new world!')

        self.assertEqual(
            read_all(self.fs, '/foo.txt'), b'Hello, new world!' + bytes(7)
        )

    def test_write_across_end_grows_by_write_size(self):
        """A write crossing the end adds its full size to the file size."""
        with self.fs.create('/a') as f:
            f.write(b'abcd')
            f.seek(2)
            f.write(b'XYZ')

        self.assertEqual(self.fs.stat('/a').size, 7)

    def test_append(self):
        """APPEND positions the cursor at the end of the data."""
        with self.fs.create('/foo.txt') as f:
            f.write(HELLO)

        f = self.fs.open_file('/foo.txt', OpenFlag.APPEND | OpenFlag.RDWR)
        self.assertEqual(f.tell(), len(HELLO))
        f.write(BYE)
        f.seek(0, Whence.START)

        self.assertEqual(f.read(), b'Hello world!Bye world')

    def test_append_read_only(self):
        """APPEND without write access only moves the cursor."""
        with self.fs.create('/foo.txt') as f:
            f.write(HELLO)

        f = self.fs.open_file('/foo.txt', OpenFlag.APPEND)
        self.assertEqual(f.read(), b'')
        with self.assertRaises(ReadOnlyError):
            f.write(BYE)

    def test_create_new(self):
        """CREATE on a missing path makes an empty file with the given mode."""
        f = self.fs.open_file('/new.txt', OpenFlag.CREATE | OpenFlag.WRONLY, 0o640)

        info = self.fs.stat('/new.txt')
        self.assertEqual(info.size, 0)
        self.assertEqual(info.mode, 0o640)

        f.write(HELLO)
        f.close()

        self.assertEqual(read_all(self.fs, '/new.txt'), HELLO)

    def test_create_existing_without_trunc(self):
        """CREATE without TRUNC on an existing file fails with ExistError."""
        with self.assertRaises(ExistError) as ctx:
            self.fs.open_file('/foo.txt', OpenFlag.CREATE | OpenFlag.WRONLY, 0)

        self.assertEqual(ctx.exception.operation, 'open')

    def test_create_trunc_existing(self):
        """CREATE|TRUNC replaces the file and its content."""
        with self.fs.create('/foo.txt') as f:
            f.write(b'Hello world!')

        flags = OpenFlag.CREATE | OpenFlag.TRUNC | OpenFlag.WRONLY
        with self.fs.open_file('/foo.txt', flags, 0o600) as f:
            f.write(b'Bye world!')

        self.assertEqual(read_all(self.fs, '/foo.txt'), b'Bye world!')
        self.assertEqual(self.fs.stat('/foo.txt').mode, 0o600)

    def test_trunc_without_create_keeps_content(self):
        """TRUNC on its own does not replace the file."""
        with self.fs.create('/foo.txt') as f:
            f.write(HELLO)

        self.fs.open_file('/foo.txt', OpenFlag.TRUNC | OpenFlag.RDWR).close()

        self.assertEqual(read_all(self.fs, '/foo.txt'), HELLO)

    def test_missing_without_create(self):
        """Without CREATE a missing file fails with NotExistError."""
        for flags in (OpenFlag.RDONLY, OpenFlag.WRONLY, OpenFlag.RDWR | OpenFlag.APPEND):
            with self.assertRaises(NotExistError):
                self.fs.open_file('/missing.txt', flags)

        self.assertFalse(self.fs.exists('/missing.txt'))

    def test_directory_with_create(self):
        """A directory is never replaced, even with CREATE|TRUNC."""
        self.fs.mkdir('/tmp')
        flags = OpenFlag.CREATE | OpenFlag.TRUNC | OpenFlag.RDWR

        with self.assertRaises(IsDirectoryError):
            self.fs.open_file('/tmp', flags, 0o644)

        self.assertTrue(self.fs.is_dir('/tmp'))

    def test_create_respects_max_file_size(self):
        """The configured maximum file size applies to new files."""
        fs = MemoryFilesystem(FilesystemConfig(max_file_size=16))

        with fs.create('/small.txt') as f:
            f.write(HELLO)
            with self.assertRaises(TooLargeError):
                f.write(BYE)

        self.assertEqual(read_all(fs, '/small.txt'), HELLO)

    def test_initial_buffer_size(self):
        """New files get the configured initial capacity."""
        fs = MemoryFilesystem(FilesystemConfig(initial_buffer_size=64))
        fs.create('/foo.txt').close()

        node = fs.root.get('foo.txt')
        self.assertIsInstance(node, FileNode)
        self.assertEqual(node.buffer.capacity, 64)


class TestSharedBuffer(unittest.TestCase):
    """Test that handles on one file see each other's writes."""

    def setUp(self):
        self.fs = MemoryFilesystem(FilesystemConfig(initial_buffer_size=4))

    def test_write_visible_to_earlier_handle(self):
        """A handle opened before a write reads the new bytes."""
        writer = self.fs.create('/shared.txt')
        reader = self.fs.open('/shared.txt')

        writer.write(HELLO)

        self.assertEqual(reader.read(), HELLO)

    def test_sharing_survives_reallocation(self):
        """Growth past the initial capacity keeps handles in sync."""
        writer = self.fs.create('/shared.txt')
        reader = self.fs.open('/shared.txt')

        writer.write(LOREM)
        writer.write(LOREM)

        self.assertEqual(reader.read(), LOREM + LOREM)

    def test_independent_cursors(self):
        """Each handle keeps its own cursor."""
        with self.fs.create('/shared.txt') as f:
            f.write(LOREM)

        a = self.fs.open('/shared.txt')
        b = self.fs.open('/shared.txt')
        a.seek(10)

        self.assertEqual(b.read(5), LOREM[:5])
        self.assertEqual(a.read(5), LOREM[10:15])

    def test_truncate_detaches_old_handles(self):
        """CREATE|TRUNC installs a new buffer; old handles keep the old one."""
        old = self.fs.create('/shared.txt')
        old.write(HELLO)

        new = self.fs.create('/shared.txt')
        new.write(BYE)
        old.seek(0)

        self.assertEqual(old.read(), HELLO)
        self.assertEqual(read_all(self.fs, '/shared.txt'), BYE)


class TestStat(unittest.TestCase):
    """Test Stat."""

    def setUp(self):
        self.fs = MemoryFilesystem(FilesystemConfig())
        self.fs.mkdir('/tmp', 0o755)
        with self.fs.create('/foo.txt') as f:
            f.write(LOREM)

    def test_stat(self):
        """Stat reports name, size and type."""
        cases = [
            ('/tmp', 'tmp', 0, True),
            ('/foo.txt', 'foo.txt', len(LOREM), False),
        ]

        for path, name, size, is_dir in cases:
            info = self.fs.stat(path)
            self.assertEqual(info.name, name)
            self.assertEqual(info.size, size)
            self.assertEqual(info.is_dir, is_dir)
            self.assertIsNone(info.sys())

    def test_stat_root(self):
        """The root can be described."""
        info = self.fs.stat('/')

        self.assertTrue(info.is_dir)
        self.assertEqual(info.name, '/')
        self.assertEqual(info.size, 0)

    def test_stat_time_is_now(self):
        """Modification time is the time of the call."""
        before = datetime.now()
        info = self.fs.stat('/foo.txt')
        after = datetime.now()

        self.assertLessEqual(before, info.mod_time)
        self.assertLessEqual(info.mod_time, after)

    def test_stat_missing(self):
        """Stat on a missing path fails with NotExistError."""
        for path in ('/bar.txt', '/nope/bar.txt', '/foo.txt/bar'):
            with self.assertRaises(NotExistError) as ctx:
                self.fs.stat(path)
            self.assertEqual(ctx.exception.operation, 'stat')
            self.assertEqual(ctx.exception.path, path)

    def test_stat_is_a_snapshot(self):
        """FileInfo does not follow later writes."""
        info = self.fs.stat('/foo.txt')
        with self.fs.open_file('/foo.txt', OpenFlag.APPEND | OpenFlag.WRONLY) as f:
            f.write(HELLO)

        self.assertEqual(info.size, len(LOREM))
        self.assertEqual(self.fs.stat('/foo.txt').size, len(LOREM) + len(HELLO))


class TestPathPolicy(unittest.TestCase):
    """Test literal path segment handling."""

    def setUp(self):
        self.fs = MemoryFilesystem(FilesystemConfig())
        self.fs.mkdir('/tmp')

    def test_dot_segments_are_names(self):
        """'.' and '..' are not interpreted."""
        with self.assertRaises(NotExistError):
            self.fs.open('/tmp/../tmp')

        self.fs.mkdir('/tmp/..')
        self.assertEqual(self.fs.listdir('/tmp'), ['..'])

    def test_double_separator(self):
        """An empty segment is an ordinary (missing) name."""
        with self.assertRaises(NotExistError):
            self.fs.stat('//tmp')

    def test_custom_separator(self):
        """The separator is configurable."""
        fs = MemoryFilesystem(FilesystemConfig(separator='\\'))
        fs.mkdir('\\data')
        fs.create('\\data\\a.txt').close()

        self.assertTrue(fs.is_file('\\data\\a.txt'))
        self.assertFalse(fs.exists('/data'))


class TestQueries(unittest.TestCase):
    """Test exists, is_dir, is_file and listdir."""

    def setUp(self):
        self.fs = MemoryFilesystem(FilesystemConfig())
        self.fs.mkdir('/tmp')
        self.fs.create('/tmp/a.txt').close()

    def test_predicates(self):
        """Predicates never raise for missing paths."""
        self.assertTrue(self.fs.exists('/tmp'))
        self.assertTrue(self.fs.is_dir('/tmp'))
        self.assertFalse(self.fs.is_file('/tmp'))
        self.assertTrue(self.fs.is_file('/tmp/a.txt'))
        self.assertFalse(self.fs.exists('/nope/a.txt'))
        self.assertFalse(self.fs.is_dir('relative'))

    def test_listdir_errors(self):
        """listdir needs an existing directory."""
        with self.assertRaises(NotDirectoryError):
            self.fs.listdir('/tmp/a.txt')
        with self.assertRaises(NotExistError):
            self.fs.listdir('/missing')

    def test_errors_share_base(self):
        """Every filesystem error can be caught through the base class."""
        with self.assertRaises(FileSystemException):
            self.fs.mkdir('/tmp')


if __name__ == '__main__':
    unittest.main()
