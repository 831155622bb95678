"""
Manifest generator.

Reads ``services.yaml`` files:

```yaml
services:
  - name: api
    commands:
      build: make api
      launch: ./bin/api
groups:
  - name: backend
    children: [api, worker]
imports:
  - ../shared/services.yaml
skip_subtree: false
```

A directory with a manifest is claimed, so lower-priority generators never see
it or its subdirectories. A manifest that fails to parse is recorded as the
generator's error: the walk continues, but none of this generator's results
are used.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from strata.config import get_settings
from strata.exceptions import ManifestError
from strata.generators.base import GeneratorBase, SkipSubtree
from strata.services.definitions import GroupDefinition, ServiceDefinition

logger = logging.getLogger(__name__)


class ManifestGenerator(GeneratorBase):
    """Discovers services, groups and imports declared in services.yaml files."""

    name = "manifest"

    def __init__(self, filename: Optional[str] = None):
        self.filename = filename or get_settings().manifest_filename
        self._services: list[ServiceDefinition] = []
        self._groups: list[GroupDefinition] = []
        self._imports: list[str] = []

    def start_walk(self, base_path: Path) -> None:
        super().start_walk(base_path)
        self._services = []
        self._groups = []
        self._imports = []

    def visit_dir(self, path: Path) -> bool:
        manifest_path = Path(path) / self.filename
        if not manifest_path.is_file():
            return False

        data = self._load(manifest_path)
        if data is None:
            return True

        try:
            services = [
                ServiceDefinition.from_dict(entry, source_path=Path(path))
                for entry in _as_list(data, "services")
            ]
            groups = [
                GroupDefinition.from_dict(entry, source_path=Path(path))
                for entry in _as_list(data, "groups")
            ]
            imports = [str(Path(path) / str(entry)) for entry in _as_list(data, "imports")]
        except (KeyError, TypeError, ValueError) as e:
            self.set_err(ManifestError("Invalid manifest entry", manifest_path, cause=e))
            logger.warning("Failed to load %s: %s", manifest_path, e)
            return True

        self._services.extend(services)
        self._groups.extend(groups)
        self._imports.extend(imports)
        logger.debug(
            "Loaded %d services, %d groups, %d imports from %s",
            len(services),
            len(groups),
            len(imports),
            manifest_path,
        )

        if data.get("skip_subtree", False):
            raise SkipSubtree(found=True)
        return True

    def services(self) -> list[ServiceDefinition]:
        return list(self._services)

    def groups(self) -> list[GroupDefinition]:
        return list(self._groups)

    def imports(self) -> list[str]:
        return list(self._imports)

    def _load(self, manifest_path: Path) -> Optional[dict[str, Any]]:
        try:
            with open(manifest_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            self.set_err(ManifestError("Could not parse manifest", manifest_path, cause=e))
            logger.warning("Failed to load %s: %s", manifest_path, e)
            return None

        if data is None:
            return {}
        if not isinstance(data, dict):
            self.set_err(ManifestError("Manifest must be a mapping", manifest_path))
            logger.warning("Failed to load %s: top level is not a mapping", manifest_path)
            return None
        return data


def _as_list(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"'{key}' must be a list, got {type(value).__name__}")
    return value
