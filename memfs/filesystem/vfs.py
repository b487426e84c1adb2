"""
Virtual File System (VFS) Module

The filesystem facade: owns the root directory and turns paths and open
flags into tree mutations and open handles.

- mkdir creates directories
- open_file (and its shortcuts create and open) creates, truncates and
  opens regular files
- stat describes any node

Failures raise the matching error kind tagged with the operation name
and the path that was passed in.

Author: YSNRFD
Version: 1.0.0
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Tuple

from .buffer import Buffer
from .file import File
from .flags import OpenFlag, has_flag, describe_flags
from .node import DirectoryNode, FileNode, FileInfo, TreeNode, new_root
from .path_resolver import PathResolver
from memfs.core.config_loader import FilesystemConfig, get_config
from memfs.exceptions import (
    FileSystemException,
    NotExistError,
    ExistError,
    IsDirectoryError,
    NotDirectoryError,
)
from memfs.logger import get_logger


class Filesystem(ABC):
    """Capability set of a filesystem."""

    @abstractmethod
    def mkdir(self, path: str, mode: Optional[int] = None) -> None:
        ...

    @abstractmethod
    def create(self, path: str) -> File:
        ...

    @abstractmethod
    def open(self, path: str) -> File:
        ...

    @abstractmethod
    def open_file(self, path: str, flags: int = OpenFlag.RDONLY, mode: int = 0) -> File:
        ...

    @abstractmethod
    def stat(self, path: str) -> FileInfo:
        ...


class MemoryFilesystem(Filesystem):
    """
    Volatile hierarchical filesystem.

    Nodes live only as long as the filesystem object. There is no
    deletion: once created, a node stays until the filesystem is
    discarded. Access is not synchronized; callers sharing an instance
    between threads must serialize access themselves.

    Example:
        >>> fs = MemoryFilesystem()
        >>> fs.mkdir('/tmp')
        >>> with fs.create('/tmp/hello.txt') as f:
        ...     f.write(b'Hello world!')
        12
        >>> fs.stat('/tmp/hello.txt').size
        12
    """

    def __init__(self, config: Optional[FilesystemConfig] = None):
        self._config = config or get_config().filesystem
        self._resolver = PathResolver(self._config.separator)
        self._root = new_root(mode=self._config.default_dir_mode)
        self._logger = get_logger('filesystem')

    @property
    def root(self) -> DirectoryNode:
        return self._root

    @property
    def config(self) -> FilesystemConfig:
        return self._config

    def _resolve(
        self,
        operation: str,
        path: str
    ) -> Tuple[DirectoryNode, Optional[TreeNode]]:
        """Resolve path, tagging resolution errors with operation and path."""
        try:
            return self._resolver.resolve(self._root, path)
        except FileSystemException as e:
            raise e.with_path(operation, path) from None

    def mkdir(self, path: str, mode: Optional[int] = None) -> None:
        """
        Create a directory.

        Args:
            path: Absolute path of the new directory
            mode: Permission bits, stored but not enforced

        Raises:
            ExistError: If a node already occupies path
            NotExistError: If the parent directory does not exist
        """
        if mode is None:
            mode = self._config.default_dir_mode

        parent, node = self._resolve('mkdir', path)

        if node is not None:
            raise ExistError(path=path, operation='mkdir')

        name = self._resolver.basename(path)
        parent.set(name, DirectoryNode(name=name, full_path=path, mode=mode))

        self._logger.debug(
            "Created directory",
            context={'path': path, 'mode': oct(mode)}
        )

    def create(self, path: str) -> File:
        """
        Create or truncate a file and open it read-write.

        Same as open_file(path, CREATE | TRUNC | RDWR, 0o666).
        """
        return self.open_file(
            path,
            OpenFlag.CREATE | OpenFlag.TRUNC | OpenFlag.RDWR,
            self._config.create_default_mode
        )

    def open(self, path: str) -> File:
        """Open an existing file read-only."""
        return self.open_file(path, OpenFlag.RDONLY, 0)

    def open_file(
        self,
        path: str,
        flags: int = OpenFlag.RDONLY,
        mode: int = 0
    ) -> File:
        """
        Open a file with explicit flags.

        Args:
            path: Absolute path of the file
            flags: OpenFlag combination; CREATE, TRUNC and APPEND plus one
                of RDONLY, WRONLY or RDWR
            mode: Permission bits for a newly created file

        Returns:
            Open handle; writes are blocked unless WRONLY or RDWR is set,
            reads are blocked for WRONLY

        Raises:
            IsDirectoryError: If path names a directory
            ExistError: If CREATE is set without TRUNC and the file exists
            NotExistError: If the file (without CREATE) or its parent
                directory does not exist
        """
        parent, node = self._resolve('open', path)

        if node is not None and node.is_directory:
            raise IsDirectoryError(path=path, operation='open')

        if has_flag(flags, OpenFlag.CREATE):
            if node is not None and not has_flag(flags, OpenFlag.TRUNC):
                raise ExistError(path=path, operation='open')

            replaced = node is not None
            name = self._resolver.basename(path)
            node = FileNode(
                name=name,
                full_path=path,
                mode=mode,
                buffer=Buffer(
                    capacity=self._config.initial_buffer_size,
                    max_size=self._config.max_file_size
                )
            )
            parent.set(name, node)

            self._logger.debug(
                "Truncated file" if replaced else "Created file",
                context={'path': path, 'mode': oct(mode)}
            )

        if node is None:
            raise NotExistError(path=path, operation='open')

        self._logger.debug(
            "Opened file",
            context={'path': path, 'flags': describe_flags(flags)}
        )
        return node.open(flags)

    def stat(self, path: str) -> FileInfo:
        """
        Describe the node at path.

        Raises:
            NotExistError: If nothing exists at path
        """
        _, node = self._resolve('stat', path)

        if node is None:
            raise NotExistError(path=path, operation='stat')

        return node.info()

    def listdir(self, path: str) -> List[str]:
        """
        List the names in a directory, sorted.

        Raises:
            NotExistError: If nothing exists at path
            NotDirectoryError: If path names a regular file
        """
        _, node = self._resolve('listdir', path)

        if node is None:
            raise NotExistError(path=path, operation='listdir')

        if not node.is_directory:
            raise NotDirectoryError(path=path, operation='listdir')

        return sorted(node)

    def _lookup(self, path: str) -> Optional[TreeNode]:
        try:
            _, node = self._resolver.resolve(self._root, path)
        except NotExistError:
            return None
        return node

    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        return self._lookup(path) is not None

    def is_dir(self, path: str) -> bool:
        """Check if a path is a directory."""
        node = self._lookup(path)
        return node is not None and node.is_directory

    def is_file(self, path: str) -> bool:
        """Check if a path is a regular file."""
        node = self._lookup(path)
        return node is not None and not node.is_directory
