"""Strata: directory-driven discovery of service and group definitions."""

from __future__ import annotations

from importlib.metadata import version

from strata.discovery import GeneratorCollection
from strata.generators import Generator, GeneratorBase, SkipSubtree

__version__ = version("strata")
__all__ = [
    "__version__",
    "Generator",
    "GeneratorBase",
    "GeneratorCollection",
    "SkipSubtree",
]
