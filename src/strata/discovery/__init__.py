"""
Discovery Module

Builds the ignore-aware directory tree, walks it with generators and merges
what they find.
"""

from strata.discovery.collection import GeneratorCollection
from strata.discovery.ignores import IgnoreRules, load_ignores
from strata.discovery.tree import Directory, IgnoredDirectory, build_directory
from strata.discovery.walker import walk

__all__ = [
    # Ignore rules
    "IgnoreRules",
    "load_ignores",
    # Tree
    "Directory",
    "IgnoredDirectory",
    "build_directory",
    # Traversal and aggregation
    "walk",
    "GeneratorCollection",
]
