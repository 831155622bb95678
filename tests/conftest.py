"""
Shared fixtures for Strata tests.

``RecordingGenerator`` is scripted with directory paths relative to the scan
root ("." is the root itself) and records every call it receives.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Optional

import pytest

from strata.generators import GeneratorBase, SkipSubtree
from strata.services import GroupDefinition, ServiceDefinition


class RecordingGenerator(GeneratorBase):
    name: str = "recording"

    def __init__(
        self,
        name: str,
        *,
        claims: Iterable[str] = (),
        skips: Iterable[str] = (),
        failures: Optional[dict[str, BaseException]] = None,
        errors: Optional[dict[str, BaseException]] = None,
        services: Optional[dict[str, list[str]]] = None,
        groups: Optional[dict[str, list[str]]] = None,
        imports: Optional[dict[str, list[str]]] = None,
        log: Optional[list] = None,
    ):
        self.name = name
        self.claims = set(claims)
        self.skips = set(skips)
        self.failures = failures or {}
        self.errors = errors or {}
        self.service_map = services or {}
        self.group_map = groups or {}
        self.import_map = imports or {}
        self.log = log if log is not None else []

        self.visits: list[str] = []
        self.started: list[Path] = []
        self.stop_calls = 0
        self._services: list[ServiceDefinition] = []
        self._groups: list[GroupDefinition] = []
        self._imports: list[str] = []

    def start_walk(self, base_path: Path) -> None:
        super().start_walk(base_path)
        self.started.append(Path(base_path))
        self.visits = []
        self._services = []
        self._groups = []
        self._imports = []

    def stop_walk(self) -> None:
        self.stop_calls += 1
        self.log.append((self.name, "stop"))

    def visit_dir(self, path: Path) -> bool:
        rel = Path(path).relative_to(self.base_path).as_posix()
        self.visits.append(rel)
        self.log.append((self.name, rel))

        if rel in self.failures:
            raise self.failures[rel]
        if rel in self.errors:
            self.set_err(self.errors[rel])

        for name in self.service_map.get(rel, []):
            self._services.append(ServiceDefinition(name=name, source_path=Path(path)))
        for name in self.group_map.get(rel, []):
            self._groups.append(GroupDefinition(name=name, source_path=Path(path)))
        self._imports.extend(self.import_map.get(rel, []))

        if rel in self.skips:
            raise SkipSubtree(found=rel in self.claims)
        return rel in self.claims

    def services(self) -> list[ServiceDefinition]:
        return list(self._services)

    def groups(self) -> list[GroupDefinition]:
        return list(self._groups)

    def imports(self) -> list[str]:
        return list(self._imports)


class VisitOnlyGenerator(GeneratorBase):
    """Generator with the base contract and no capabilities."""

    name = "visit_only"

    def __init__(self):
        self.visits: list[Path] = []

    def visit_dir(self, path: Path) -> bool:
        self.visits.append(Path(path))
        return False


@pytest.fixture
def recording_generator() -> type[RecordingGenerator]:
    return RecordingGenerator


@pytest.fixture
def visit_only_generator() -> type[VisitOnlyGenerator]:
    return VisitOnlyGenerator


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[..., Path]:
    """Create directories (and optional files) under a fresh scan root."""

    def _make(*dirs: str, files: Optional[dict[str, str | bytes]] = None) -> Path:
        root = tmp_path / "root"
        root.mkdir(exist_ok=True)
        for rel in dirs:
            (root / rel).mkdir(parents=True, exist_ok=True)
        for rel, content in (files or {}).items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content)
        return root

    return _make


@pytest.fixture
def deep_tree(tmp_path: Path):
    """
    Create ``root/d/d/...`` nested ``depth`` levels and return (root, deepest).

    Levels are created and removed one at a time; recursive helpers such as
    ``mkdir(parents=True)`` would hit the interpreter's recursion limit.
    """
    created: list[Path] = []

    def _make(depth: int) -> tuple[Path, Path]:
        root = tmp_path / "deep"
        root.mkdir()
        created.append(root)
        current = root
        for _ in range(depth):
            current = current / "d"
            current.mkdir()
            created.append(current)
        return root, current

    yield _make

    for directory in reversed(created):
        for entry in directory.iterdir():
            if not entry.is_dir():
                entry.unlink()
        directory.rmdir()
