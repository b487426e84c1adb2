"""
Node Module

Entries of the directory tree. A node is either a DirectoryNode holding
a name -> node mapping or a FileNode holding a Buffer; the two are
separate types, so a node can never be both or neither.

Mode bits are stored as given and never checked.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Iterator, Union

from .buffer import Buffer
from .file import File, MemoryFile, ReadOnlyFile, WriteOnlyFile
from .flags import OpenFlag, Whence, has_flag


DEFAULT_DIR_MODE = 0o777


@dataclass(frozen=True)
class FileInfo:
    """
    Read-only description of a node, as returned by stat().

    mod_time is the time of the stat call; modification times are not
    tracked.
    """
    name: str
    size: int
    mode: int
    mod_time: datetime
    is_dir: bool

    def sys(self) -> None:
        """Underlying data source; an in-memory node has none."""
        return None


@dataclass(eq=False)
class Node:
    """Common part of every tree entry."""
    name: str
    full_path: str
    mode: int

    @property
    def is_directory(self) -> bool:
        return False

    @property
    def size(self) -> int:
        return 0

    def info(self) -> FileInfo:
        return FileInfo(
            name=self.name,
            size=self.size,
            mode=self.mode,
            mod_time=datetime.now(),
            is_dir=self.is_directory,
        )


@dataclass(eq=False)
class DirectoryNode(Node):
    """A directory. Children are keyed by their last path segment."""
    children: dict[str, 'TreeNode'] = field(default_factory=dict, repr=False)

    @property
    def is_directory(self) -> bool:
        return True

    def get(self, name: str) -> Optional['TreeNode']:
        return self.children.get(name)

    def set(self, name: str, node: 'TreeNode') -> None:
        """Install node under name, replacing any previous entry."""
        self.children[name] = node

    def __contains__(self, name: str) -> bool:
        return name in self.children

    def __iter__(self) -> Iterator[str]:
        return iter(self.children)


@dataclass(eq=False)
class FileNode(Node):
    """A regular file backed by a Buffer shared with its open handles."""
    buffer: Buffer = field(default_factory=Buffer, repr=False)

    @property
    def size(self) -> int:
        return len(self.buffer)

    def open(self, flags: int) -> File:
        """
        Build a handle over this file's buffer.

        APPEND positions the cursor at the end of the data. The access
        mode selects the wrapper: RDWR gives the bare handle, WRONLY blocks
        reads, anything else blocks writes.
        """
        file = MemoryFile(self.full_path, self.buffer)

        if has_flag(flags, OpenFlag.APPEND):
            file.seek(0, Whence.END)

        if has_flag(flags, OpenFlag.RDWR):
            return file
        elif has_flag(flags, OpenFlag.WRONLY):
            return WriteOnlyFile(file)
        else:
            return ReadOnlyFile(file)


TreeNode = Union[DirectoryNode, FileNode]


def new_root(mode: int = DEFAULT_DIR_MODE) -> DirectoryNode:
    """Create the root directory of a tree."""
    return DirectoryNode(name='/', full_path='/', mode=mode)
