"""
Per-directory ignore rules.

Each directory may carry an ignore file (``.strataignore`` by default) written in
gitignore syntax. A directory without one inherits the rules of its nearest
ancestor that has one; see ``Directory.ignores``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

import pathspec

from strata.config import DEFAULT_IGNORE_FILENAME
from strata.exceptions import IgnoreFileError

logger = logging.getLogger(__name__)


class IgnoreRules:
    """Compiled gitignore patterns, anchored at the directory that declared them."""

    def __init__(
        self,
        spec: pathspec.PathSpec,
        base_path: Path,
        source: Optional[Path] = None,
        lines: Iterable[str] = (),
    ) -> None:
        self.spec = spec
        self.base_path = Path(base_path)
        self.source = source
        self.lines = list(lines)

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        base_path: Path,
        source: Optional[Path] = None,
    ) -> IgnoreRules:
        """Compile gitignore lines into rules anchored at ``base_path``."""
        lines = list(lines)
        return cls(pathspec.GitIgnoreSpec.from_lines(lines), base_path, source, lines)

    @property
    def patterns(self) -> list[str]:
        """Non-blank, non-comment patterns, in file order."""
        stripped = (line.strip() for line in self.lines)
        return [line for line in stripped if line and not line.startswith("#")]

    def matches(self, path: Path | str, is_dir: bool = True) -> bool:
        """
        Check whether ``path`` is excluded by these rules.

        Args:
            path: Path to test, expressed the same way as ``base_path``
                (both absolute or both relative to the same working directory)
            is_dir: Whether ``path`` is a directory, so that patterns with a
                trailing slash apply

        Returns:
            True if the path is ignored. Paths outside ``base_path`` and
            ``base_path`` itself never match.
        """
        try:
            relative = Path(path).relative_to(self.base_path)
        except ValueError:
            return False

        rel_str = relative.as_posix()
        if rel_str in ("", "."):
            return False
        if is_dir:
            rel_str += "/"
        return self.spec.match_file(rel_str)

    def __repr__(self) -> str:
        return f"IgnoreRules(base_path={str(self.base_path)!r}, patterns={len(self.patterns)})"


def load_ignores(path: Path, filename: str = DEFAULT_IGNORE_FILENAME) -> Optional[IgnoreRules]:
    """
    Load the ignore file declared directly in ``path``.

    Args:
        path: Directory to look in
        filename: Ignore file name

    Returns:
        The compiled rules, or None when the directory has no ignore file

    Raises:
        IgnoreFileError: If the file exists but cannot be read or compiled
    """
    ignore_file = Path(path) / filename
    if not ignore_file.is_file():
        return None

    try:
        with open(ignore_file, encoding="utf-8") as f:
            lines = f.read().splitlines()
        rules = IgnoreRules.from_lines(lines, Path(path), source=ignore_file)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        # pathspec pattern errors are ValueErrors
        raise IgnoreFileError(ignore_file, cause=e) from e

    logger.debug("Loaded %d ignore patterns from %s", len(rules.patterns), ignore_file)
    return rules
