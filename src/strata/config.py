"""
Configuration for Strata.

Runtime settings come from environment variables (``STRATA_*``) and an optional
``.env`` file. Project settings come from the ``discovery`` section of a
``strata.yaml`` file at the project root.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from strata.config_schema import DiscoveryConfig, ProjectConfig
from strata.exceptions import ConfigurationError

PROJECT_CONFIG_FILE = "strata.yaml"
DEFAULT_IGNORE_FILENAME = ".strataignore"
DEFAULT_MANIFEST_FILENAME = "services.yaml"


class Settings(BaseSettings):
    """Runtime configuration for Strata, loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STRATA_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    root_path: Path = Field(default=Path("."), description="Directory to scan")
    ignore_filename: str = Field(
        default=DEFAULT_IGNORE_FILENAME,
        description="Per-directory ignore file (gitignore syntax)",
    )
    manifest_filename: str = Field(
        default=DEFAULT_MANIFEST_FILENAME,
        description="File read by the manifest generator in each directory",
    )
    log_level: str = Field(default="WARNING", description="Log level for the strata logger")
    targets: list[str] = Field(
        default_factory=list,
        description="Service and group names to keep (JSON list in the environment)",
    )


@lru_cache
def _get_settings() -> Settings:
    return Settings()


def get_settings() -> Settings:
    """
    Get runtime settings.

    Returns:
        Cached Settings instance

    Example:
        ```python
        from strata.config import get_settings

        settings = get_settings()
        ignore_file = settings.ignore_filename
        ```
    """
    return _get_settings()


def clear_settings_cache() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    _get_settings.cache_clear()


def load_project_config(project_root: Optional[Path] = None) -> ProjectConfig:
    """
    Load strata.yaml from the project root.

    A missing file, an empty file or a missing ``discovery`` section all yield
    defaults.

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    if project_root is None:
        project_root = Path.cwd()

    config_path = project_root / PROJECT_CONFIG_FILE

    if not config_path.exists():
        return ProjectConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"{config_path} is not valid YAML",
            suggestions=["Check indentation and quoting in strata.yaml"],
            cause=e,
        ) from e

    if not data:
        return ProjectConfig()

    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping at the top level")

    try:
        return ProjectConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid discovery configuration in {config_path}",
            suggestions=["Allowed keys: generators, targets, ignore_filename"],
            cause=e,
        ) from e


def get_discovery_config(project_root: Optional[Path] = None) -> DiscoveryConfig:
    """Get the discovery section of strata.yaml."""
    return load_project_config(project_root).discovery
