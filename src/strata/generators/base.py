"""
Base classes for Strata generators.

A generator inspects directories during a discovery run and may contribute
services, groups and import paths. The base contract is ``Generator``; the three
capability protocols are optional and are detected at aggregation time, so a
generator supports a capability simply by defining the matching method.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Protocol, Sequence, runtime_checkable


class SkipSubtree(Exception):
    """
    Raised from ``visit_dir`` to drop the generator for everything below a directory.

    This is a control-flow signal, not a failure. The generator has already
    handled the directory it was raised from; only the descendants are
    skipped.

    Args:
        found: Also claim the directory, exactly as if ``visit_dir`` had
            returned True
    """

    def __init__(self, found: bool = False):
        super().__init__("skip subtree")
        self.found = found


@runtime_checkable
class NamedRecord(Protocol):
    """Anything a generator discovers as a service or group: it must have a name."""

    name: str


class Generator(ABC):
    """
    Base class for all discovery generators.

    A generator instance serves one run at a time. ``start_walk`` resets its
    per-run state, ``visit_dir`` is called for each directory the walker offers
    it, and ``stop_walk`` is always called once the run ends, whether or not it
    succeeded.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Generator name, unique within a registry."""

    @abstractmethod
    def start_walk(self, base_path: Path) -> None:
        """
        Prepare for a run rooted at ``base_path``.

        Must clear any error recorded by a previous run.
        """

    @abstractmethod
    def visit_dir(self, path: Path) -> bool:
        """
        Inspect a single directory.

        Args:
            path: Directory being visited

        Returns:
            True to claim the directory. Generators after this one in the
            active list are not offered the directory or anything below it.

        Raises:
            SkipSubtree: To stop receiving directories below ``path``
            Exception: Any other exception aborts the whole run
        """

    @abstractmethod
    def stop_walk(self) -> None:
        """Release resources held for the run."""

    @property
    @abstractmethod
    def err(self) -> Optional[BaseException]:
        """Error recorded during the current run, if any."""

    @abstractmethod
    def set_err(self, err: Optional[BaseException]) -> None:
        """
        Record a terminal error for the current run.

        The run carries on, but nothing this generator discovered is used.
        """


class GeneratorBase(Generator, ABC):
    """
    Generator with the per-run bookkeeping already implemented.

    Subclasses provide ``name`` and ``visit_dir``, and override ``start_walk``
    (calling super) when they keep their own per-run state.

    Example:
        ```python
        class DockerfileGenerator(GeneratorBase):
            name = "dockerfile"

            def start_walk(self, base_path):
                super().start_walk(base_path)
                self._services = []

            def visit_dir(self, path):
                if not (path / "Dockerfile").exists():
                    return False
                self._services.append(ServiceDefinition(name=path.name, source_path=path))
                return True

            def services(self):
                return self._services
        ```
    """

    _err: Optional[BaseException] = None
    base_path: Optional[Path] = None

    def start_walk(self, base_path: Path) -> None:
        self._err = None
        self.base_path = Path(base_path)

    def stop_walk(self) -> None:
        pass

    @property
    def err(self) -> Optional[BaseException]:
        return self._err

    def set_err(self, err: Optional[BaseException]) -> None:
        self._err = err


@runtime_checkable
class ServiceGenerator(Protocol):
    """Capability: the generator exposes discovered services."""

    def services(self) -> Sequence[NamedRecord]: ...


@runtime_checkable
class GroupGenerator(Protocol):
    """Capability: the generator exposes discovered groups."""

    def groups(self) -> Sequence[NamedRecord]: ...


@runtime_checkable
class ImportGenerator(Protocol):
    """Capability: the generator exposes paths of further definitions to import."""

    def imports(self) -> Sequence[str]: ...


CAPABILITIES: dict[str, type] = {
    "services": ServiceGenerator,
    "groups": GroupGenerator,
    "imports": ImportGenerator,
}


def generator_capabilities(generator: Any) -> list[str]:
    """Return the capability names a generator supports, in a fixed order."""
    return [name for name, protocol in CAPABILITIES.items() if isinstance(generator, protocol)]
