"""
Strata Generators

A generator is offered each directory of a discovery run and may contribute
services, groups and import paths. Write one by subclassing ``GeneratorBase``
and adding any of ``services()``, ``groups()`` or ``imports()``.
"""

from strata.generators.base import (
    Generator,
    GeneratorBase,
    GroupGenerator,
    ImportGenerator,
    NamedRecord,
    ServiceGenerator,
    SkipSubtree,
    generator_capabilities,
)
from strata.generators.manifest import ManifestGenerator
from strata.generators.registry import (
    ENTRY_POINT_GROUP,
    GeneratorRegistry,
    discover_generators,
    get_global_registry,
    register_builtin_generators,
)

__all__ = [
    # Contract
    "Generator",
    "GeneratorBase",
    "SkipSubtree",
    "NamedRecord",
    "ServiceGenerator",
    "GroupGenerator",
    "ImportGenerator",
    "generator_capabilities",
    # Built-in generators
    "ManifestGenerator",
    # Registry
    "ENTRY_POINT_GROUP",
    "GeneratorRegistry",
    "discover_generators",
    "get_global_registry",
    "register_builtin_generators",
]
