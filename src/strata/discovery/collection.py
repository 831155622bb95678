"""
Generator collection: runs discovery over a directory tree and merges the results.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from operator import attrgetter
from pathlib import Path
from typing import Iterable, Optional, Sequence

from strata.config import DEFAULT_IGNORE_FILENAME
from strata.discovery.tree import Directory, build_directory
from strata.discovery.walker import walk
from strata.exceptions import RootPathError
from strata.generators.base import (
    Generator,
    GroupGenerator,
    ImportGenerator,
    NamedRecord,
    ServiceGenerator,
)

logger = logging.getLogger(__name__)


class GeneratorCollection:
    """
    An ordered set of generators and the directory they scan.

    Generator order matters: when a generator claims a directory, the
    generators after it never see that directory or anything below it.

    Example:
        ```python
        collection = GeneratorCollection([ManifestGenerator()], path="services")
        collection.generate()
        for service in collection.services():
            print(service.name)
        ```
    """

    def __init__(
        self,
        generators: Sequence[Generator],
        path: Path | str,
        targets: Optional[Iterable[str]] = None,
        ignore_filename: str = DEFAULT_IGNORE_FILENAME,
    ):
        """
        Args:
            generators: Generators in priority order
            path: Root directory to scan
            targets: Service and group names to keep; empty or None keeps all
            ignore_filename: Name of the per-directory ignore file
        """
        self.generators = list(generators)
        self.path = Path(path)
        self.targets = list(targets or [])
        self.ignore_filename = ignore_filename

        self.service_origins: dict[str, str] = {}
        self.group_origins: dict[str, str] = {}

    def generate(self) -> None:
        """
        Run every generator over the tree rooted at ``path``.

        ``stop_walk`` is called on every generator once the walk ends, even
        when it fails.

        Raises:
            RootPathError: If ``path`` is not an existing directory
            IgnoreFileError: If an ignore file in the tree is invalid
            DirectoryReadError: If a directory cannot be listed
            WalkError: If a generator fails while visiting a directory
        """
        if not self.path.exists():
            raise RootPathError(self.path, cause=FileNotFoundError(str(self.path)))
        if not self.path.is_dir():
            raise RootPathError(self.path)

        root = build_directory(self.path, ignore_filename=self.ignore_filename)

        with ExitStack() as stack:
            # ExitStack unwinds last-in first-out
            for generator in reversed(self.generators):
                stack.callback(generator.stop_walk)
            for generator in self.generators:
                generator.start_walk(self.path)

            walk(root, self.generators)

        if isinstance(root, Directory):
            logger.info(
                "Discovery in %s visited %d directories (%d ignored)",
                self.path,
                sum(1 for _ in root.iter_directories()),
                sum(1 for _ in root.iter_ignored()),
            )

    def services(self) -> list[NamedRecord]:
        """
        Services from every generator that finished without a recorded error.

        Returns:
            Services sorted by name, restricted to ``targets`` when set.
            Duplicate names from different generators are all kept.
        """
        found: list[NamedRecord] = []
        self.service_origins = {}
        for generator in self._healthy(ServiceGenerator, "services"):
            for service in generator.services():
                self.service_origins[service.name] = generator.name
                found.append(service)
        return self._select(found)

    def groups(self) -> list[NamedRecord]:
        """
        Groups from every generator that finished without a recorded error.

        Returns:
            Groups sorted by name, restricted to ``targets`` when set.
            Duplicate names from different generators are all kept.
        """
        found: list[NamedRecord] = []
        self.group_origins = {}
        for generator in self._healthy(GroupGenerator, "groups"):
            for group in generator.groups():
                self.group_origins[group.name] = generator.name
                found.append(group)
        return self._select(found)

    def imports(self) -> list[str]:
        """Import paths from every generator without a recorded error, in generator order."""
        found: list[str] = []
        for generator in self._healthy(ImportGenerator, "imports"):
            found.extend(generator.imports())
        return found

    def _healthy(self, capability: type, label: str) -> list:
        healthy = []
        for generator in self.generators:
            if not isinstance(generator, capability):
                continue
            if generator.err is not None:
                logger.warning(
                    "Ignoring %s from generator %s: %s", label, generator.name, generator.err
                )
                continue
            healthy.append(generator)
        return healthy

    def _select(self, records: list[NamedRecord]) -> list[NamedRecord]:
        if self.targets:
            wanted = set(self.targets)
            records = [record for record in records if record.name in wanted]
        return sorted(records, key=attrgetter("name"))

    def __repr__(self) -> str:
        names = ", ".join(generator.name for generator in self.generators)
        return f"GeneratorCollection(path={str(self.path)!r}, generators=[{names}])"
