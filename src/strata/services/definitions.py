"""
Service and group definitions.

These are the records the bundled manifest generator produces. The discovery
core only relies on ``name``; everything else is carried through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional


@dataclass
class ServiceDefinition:
    """Represents a service entry from a services.yaml manifest."""

    name: str
    description: str = ""
    commands: dict[str, str] = field(default_factory=dict)
    env: dict[str, str] = field(default_factory=dict)
    depends_on: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)
    source_path: Optional[Path] = None

    _KNOWN_KEYS = ("name", "description", "commands", "env", "depends_on")

    @classmethod
    def from_dict(cls, data: dict[str, Any], source_path: Optional[Path] = None) -> ServiceDefinition:
        """Load a service definition from a dictionary.

        Raises:
            KeyError: If ``name`` is missing
            TypeError: If ``data`` is not a mapping
        """
        if not isinstance(data, dict):
            raise TypeError(f"service entry must be a mapping, got {type(data).__name__}")
        return cls(
            name=str(data["name"]),
            description=data.get("description", ""),
            commands=dict(data.get("commands") or {}),
            env={str(k): str(v) for k, v in (data.get("env") or {}).items()},
            depends_on=list(data.get("depends_on") or []),
            extra={k: v for k, v in data.items() if k not in cls._KNOWN_KEYS},
            source_path=source_path,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "commands": self.commands,
            "env": self.env,
            "depends_on": self.depends_on,
            "source_path": str(self.source_path) if self.source_path else None,
            **self.extra,
        }


@dataclass
class GroupDefinition:
    """A named set of services (or other groups) from a services.yaml manifest."""

    name: str
    description: str = ""
    children: list[str] = field(default_factory=list)
    source_path: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], source_path: Optional[Path] = None) -> GroupDefinition:
        """Load a group definition from a dictionary.

        Raises:
            KeyError: If ``name`` is missing
            TypeError: If ``data`` is not a mapping
        """
        if not isinstance(data, dict):
            raise TypeError(f"group entry must be a mapping, got {type(data).__name__}")
        return cls(
            name=str(data["name"]),
            description=data.get("description", ""),
            children=[str(child) for child in data.get("children") or []],
            source_path=source_path,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "children": self.children,
            "source_path": str(self.source_path) if self.source_path else None,
        }
