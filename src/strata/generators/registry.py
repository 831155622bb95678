"""
Generator registry.

Keeps a catalog of generator factories by name. Third-party generators are
installed as Python packages exposing an entry point:

```toml
[project.entry-points."strata.generators"]
dockerfile = "my_strata_plugin:DockerfileGenerator"
```

The registry holds factories rather than instances because a generator carries
per-run state; every collection gets fresh instances from ``create``.
"""

from __future__ import annotations

import logging
from importlib.metadata import entry_points
from typing import Callable, Iterable, Optional

from strata.exceptions import GeneratorNotFoundError
from strata.generators.base import Generator
from strata.generators.manifest import ManifestGenerator

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "strata.generators"

GeneratorFactory = Callable[[], Generator]


class GeneratorRegistry:
    """
    Central registry for Strata generators.

    Names are listed in registration order, which is also the priority order
    used when a run asks for every registered generator.
    """

    def __init__(self):
        self._factories: dict[str, GeneratorFactory] = {}

    def register(self, name: str, factory: GeneratorFactory, replace: bool = False) -> None:
        """
        Register a generator factory.

        Args:
            name: Generator name
            factory: Generator class or zero-argument callable returning a generator
            replace: Whether to replace an existing factory with the same name

        Raises:
            ValueError: If a generator with the same name exists and replace=False
        """
        if name in self._factories and not replace:
            raise ValueError(
                f"Generator '{name}' is already registered. Use replace=True to overwrite."
            )
        self._factories[name] = factory

    def unregister(self, name: str) -> bool:
        """Remove a generator. Returns True if it was registered."""
        return self._factories.pop(name, None) is not None

    def get(self, name: str) -> Optional[GeneratorFactory]:
        """Get a generator factory by name, or None if not registered."""
        return self._factories.get(name)

    def create(self, name: str) -> Generator:
        """
        Create a fresh generator instance.

        Raises:
            GeneratorNotFoundError: If ``name`` is not registered
        """
        factory = self._factories.get(name)
        if factory is None:
            raise GeneratorNotFoundError(name, available=self.list_generators())
        return factory()

    def create_all(self, names: Optional[Iterable[str]] = None) -> list[Generator]:
        """
        Create generators in priority order.

        Args:
            names: Generator names in the order they should run. None or empty
                means every registered generator, in registration order.
        """
        selected = list(names or []) or self.list_generators()
        return [self.create(name) for name in selected]

    def list_generators(self) -> list[str]:
        """List registered generator names in registration order."""
        return list(self._factories)

    def clear(self) -> None:
        """Remove all registered generators (primarily for tests)."""
        self._factories.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)


_GLOBAL_REGISTRY = GeneratorRegistry()


def get_global_registry() -> GeneratorRegistry:
    """Get the process-wide generator registry."""
    return _GLOBAL_REGISTRY


def register_builtin_generators(registry: Optional[GeneratorRegistry] = None) -> None:
    """Register the generators that ship with Strata."""
    if registry is None:
        registry = get_global_registry()
    registry.register(ManifestGenerator.name, ManifestGenerator, replace=True)


def discover_generators(registry: Optional[GeneratorRegistry] = None) -> list[str]:
    """
    Register built-in generators and every installed ``strata.generators`` entry point.

    Entry points that fail to load are logged and skipped.

    Returns:
        Names registered from entry points
    """
    if registry is None:
        registry = get_global_registry()
    register_builtin_generators(registry)

    discovered: list[str] = []
    for entry_point in entry_points(group=ENTRY_POINT_GROUP):
        try:
            factory = entry_point.load()
        except Exception as exc:
            logger.warning("Failed to load generator %s: %s", entry_point.name, exc)
            continue
        if not callable(factory):
            logger.warning("Generator entry point %s is not callable", entry_point.name)
            continue
        registry.register(entry_point.name, factory, replace=True)
        discovered.append(entry_point.name)

    logger.debug("Discovered generators: %s", discovered)
    return discovered
