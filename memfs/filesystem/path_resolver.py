"""
Path Resolver Module

Resolves absolute paths against a directory tree.

Resolution walks every segment but the last from the root; each of them
must name an existing directory. The last segment is looked up in the
resolved parent and may be missing, which lets the same walk serve
lookups (stat, open) and insertions (mkdir, create).

Segments are taken literally: '.' and '..' are ordinary names and empty
segments (from '//' or a trailing separator) are empty names. The bare
root path resolves to the root itself.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Optional, List, Tuple

from .node import DirectoryNode, TreeNode
from memfs.exceptions import NotExistError


@dataclass
class ParsedPath:
    """A parsed absolute path with its components."""
    components: List[str]
    separator: str = '/'

    @property
    def is_root(self) -> bool:
        return not self.components

    @property
    def parents(self) -> List[str]:
        """Every component but the last."""
        return self.components[:-1]

    @property
    def leaf(self) -> str:
        return self.components[-1] if self.components else self.separator


class PathResolver:
    """
    Resolves paths into (parent, node) pairs.

    Example:
        >>> resolver = PathResolver()
        >>> resolver.parse('/tmp/foo.txt').components
        ['tmp', 'foo.txt']
    """

    def __init__(self, separator: str = '/') -> None:
        self.separator = separator

    def is_absolute(self, path: str) -> bool:
        """Check if a path is absolute."""
        return path.startswith(self.separator)

    def parse(self, path: str) -> ParsedPath:
        """
        Split an absolute path into components.

        Raises:
            NotExistError: If the path is not absolute
        """
        if not self.is_absolute(path):
            raise NotExistError(context={'reason': 'relative path'})

        if path == self.separator:
            return ParsedPath(components=[], separator=self.separator)

        # Drop the empty segment in front of the root separator
        components = path.split(self.separator)[1:]
        return ParsedPath(components=components, separator=self.separator)

    def basename(self, path: str) -> str:
        """Get the last component of a path."""
        return self.parse(path).leaf

    def resolve(
        self,
        root: DirectoryNode,
        path: str
    ) -> Tuple[DirectoryNode, Optional[TreeNode]]:
        """
        Resolve a path to its parent directory and its node.

        Args:
            root: Root directory of the tree
            path: Absolute path

        Returns:
            (parent, node), where node is None when only the last
            component is missing. The root resolves to (root, root).

        Raises:
            NotExistError: If an intermediate component is missing or is
                not a directory
        """
        parsed = self.parse(path)

        if parsed.is_root:
            return root, root

        parent = root
        for component in parsed.parents:
            entry = parent.get(component)
            if entry is None or not entry.is_directory:
                raise NotExistError(context={'component': component})
            parent = entry

        return parent, parent.get(parsed.leaf)
