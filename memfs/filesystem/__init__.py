"""
memfs Virtual File System Module

Provides the in-memory filesystem implementation:
- Growable shared buffers backing regular files
- Open handles with POSIX-like open flags
- Hierarchical directory tree with path resolution
"""

from .buffer import Buffer, INITIAL_DATA_SIZE
from .flags import OpenFlag, Whence, has_flag
from .file import File, MemoryFile, FileWrapper, ReadOnlyFile, WriteOnlyFile
from .node import (
    Node,
    DirectoryNode,
    FileNode,
    FileInfo,
    TreeNode,
    DEFAULT_DIR_MODE,
)
from .path_resolver import PathResolver, ParsedPath
from .vfs import Filesystem, MemoryFilesystem

__all__ = [
    # Buffer
    'Buffer',
    'INITIAL_DATA_SIZE',
    # Flags
    'OpenFlag',
    'Whence',
    'has_flag',
    # Open files
    'File',
    'MemoryFile',
    'FileWrapper',
    'ReadOnlyFile',
    'WriteOnlyFile',
    # Nodes
    'Node',
    'DirectoryNode',
    'FileNode',
    'FileInfo',
    'TreeNode',
    'DEFAULT_DIR_MODE',
    # Path Resolver
    'PathResolver',
    'ParsedPath',
    # VFS
    'Filesystem',
    'MemoryFilesystem',
]
