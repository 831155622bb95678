"""
Project Configuration Schema

Pydantic models for the ``discovery`` section of strata.yaml.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DiscoveryConfig(BaseModel):
    """Discovery settings for a project.

    Example in strata.yaml:
        discovery:
          generators:
            - manifest
          targets:
            - api
            - worker
          ignore_filename: .strataignore
    """

    model_config = ConfigDict(extra="forbid")

    generators: list[str] = Field(
        default_factory=list,
        description="Ordered generator names. Empty means every registered generator.",
    )
    targets: list[str] = Field(
        default_factory=list,
        description="Service and group names to keep. Empty keeps everything.",
    )
    ignore_filename: Optional[str] = Field(
        default=None,
        description="Per-directory ignore file name (overrides STRATA_IGNORE_FILENAME).",
    )

    @field_validator("generators")
    @classmethod
    def validate_generators(cls, v: list[str]) -> list[str]:
        """Generator order is significant, so a name may only appear once."""
        seen: set[str] = set()
        for name in v:
            if name in seen:
                raise ValueError(f"Generator '{name}' is listed more than once")
            seen.add(name)
        return v

    @field_validator("ignore_filename")
    @classmethod
    def validate_ignore_filename(cls, v: Optional[str]) -> Optional[str]:
        """Ignore files live inside each directory, so the name can't contain a path."""
        if v is not None and ("/" in v or "\\" in v or not v.strip()):
            raise ValueError(f"ignore_filename must be a plain file name, got {v!r}")
        return v


class ProjectConfig(BaseModel):
    """Top-level strata.yaml document."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
