"""
Directory tree for discovery runs.

The tree is built once per run, before any generator sees a directory. Child
directories matched by an inherited ignore rule are kept in the tree as
``IgnoredDirectory`` placeholders so that every consumer has to handle them
explicitly; nothing below them is ever listed.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Union

from strata.config import DEFAULT_IGNORE_FILENAME
from strata.discovery.ignores import IgnoreRules, load_ignores
from strata.exceptions import DirectoryReadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IgnoredDirectory:
    """Placeholder for a child directory excluded by an ignore rule."""

    path: Path


@dataclass(eq=False)
class Directory:
    """A directory considered for discovery."""

    path: Path
    parent: Optional[Directory] = field(default=None, repr=False)
    rules: Optional[IgnoreRules] = field(default=None, repr=False)
    children: list[Union[Directory, IgnoredDirectory]] = field(default_factory=list, repr=False)

    def ignores(self) -> Optional[IgnoreRules]:
        """Return the ignore rules for this directory or its nearest ancestor that has any."""
        directory: Optional[Directory] = self
        while directory is not None:
            if directory.rules is not None:
                return directory.rules
            directory = directory.parent
        return None

    def iter_directories(self) -> Iterator[Directory]:
        """Yield this directory and every non-ignored descendant, in preorder."""
        stack: list[Directory] = [self]
        while stack:
            directory = stack.pop()
            yield directory
            stack.extend(
                child for child in reversed(directory.children) if isinstance(child, Directory)
            )

    def iter_ignored(self) -> Iterator[IgnoredDirectory]:
        """Yield every ignored placeholder in this subtree."""
        stack = [iter(self.children)]
        while stack:
            child = next(stack[-1], None)
            if child is None:
                stack.pop()
            elif isinstance(child, IgnoredDirectory):
                yield child
            else:
                stack.append(iter(child.children))

    def find(self, path: Path | str) -> Optional[Directory]:
        """Return the non-ignored directory at ``path`` in this subtree, if any."""
        target = Path(path)
        for directory in self.iter_directories():
            if directory.path == target:
                return directory
        return None


def build_directory(
    path: Path | str,
    parent: Optional[Directory] = None,
    ignore_filename: str = DEFAULT_IGNORE_FILENAME,
) -> Union[Directory, IgnoredDirectory]:
    """
    Build the directory tree rooted at ``path``.

    Args:
        path: Directory to build
        parent: Parent node, None for the root of the run
        ignore_filename: Name of the per-directory ignore file

    Returns:
        The directory node, or an IgnoredDirectory if the parent's rules
        exclude ``path``

    Raises:
        IgnoreFileError: If an ignore file in the tree is invalid
        DirectoryReadError: If a directory cannot be listed

    Directories are read in preorder. Children are added in the order
    ``os.scandir`` returns them, which depends on the filesystem. Symlinked
    directories are not followed.
    """
    root, subdirs = _build_node(Path(path), parent, ignore_filename)
    if isinstance(root, IgnoredDirectory):
        return root

    # (directory, names of its subdirectories still to build)
    pending: list[tuple[Directory, Iterator[str]]] = [(root, iter(subdirs))]
    while pending:
        directory, names = pending[-1]
        name = next(names, None)
        if name is None:
            pending.pop()
            continue
        child, child_subdirs = _build_node(directory.path / name, directory, ignore_filename)
        directory.children.append(child)
        if isinstance(child, Directory):
            pending.append((child, iter(child_subdirs)))

    return root


def _build_node(
    path: Path,
    parent: Optional[Directory],
    ignore_filename: str,
) -> tuple[Union[Directory, IgnoredDirectory], list[str]]:
    """Create the node for ``path`` and list its subdirectory names."""
    if parent is not None:
        parent_rules = parent.ignores()
        if parent_rules is not None and parent_rules.matches(path, is_dir=True):
            logger.debug("Ignoring %s (rules from %s)", path, parent_rules.source)
            return IgnoredDirectory(path), []

    rules = load_ignores(path, ignore_filename)

    try:
        with os.scandir(path) as it:
            subdirs = [entry.name for entry in it if entry.is_dir(follow_symlinks=False)]
    except OSError as e:
        raise DirectoryReadError(path, cause=e) from e

    return Directory(path=path, parent=parent, rules=rules), subdirs
