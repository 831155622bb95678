"""
Preorder walk that offers each directory to the active generators.

The active list can only shrink on the way down:

- a generator that raises ``SkipSubtree`` at a directory is dropped for
  everything below it;
- a generator that claims a directory (``visit_dir`` returns True) stops the
  generators after it from seeing that directory or anything below it.

There is no way for a dropped generator to rejoin deeper in the tree.
"""

from __future__ import annotations

import logging
from typing import Sequence, Union

from strata.discovery.tree import Directory, IgnoredDirectory
from strata.exceptions import WalkError
from strata.generators.base import Generator, SkipSubtree

logger = logging.getLogger(__name__)


def walk(
    directory: Union[Directory, IgnoredDirectory],
    generators: Sequence[Generator],
) -> None:
    """
    Offer ``directory`` and its subtree to ``generators``.

    Args:
        directory: Root of the subtree to walk
        generators: Active generators, in priority order

    Raises:
        WalkError: If a generator raises anything other than SkipSubtree. No
            further directories are visited.
    """
    pending: list[tuple[Union[Directory, IgnoredDirectory], Sequence[Generator]]] = [
        (directory, generators)
    ]
    while pending:
        current, active = pending.pop()
        if isinstance(current, IgnoredDirectory) or not active:
            continue

        child_generators = _visit(current, active)
        pending.extend((child, child_generators) for child in reversed(current.children))


def _visit(directory: Directory, generators: Sequence[Generator]) -> list[Generator]:
    """Offer one directory to ``generators`` and return the generators for its children."""
    child_generators: list[Generator] = []
    for generator in generators:
        skip = False
        try:
            found = generator.visit_dir(directory.path)
        except SkipSubtree as signal:
            found = signal.found
            skip = True
        except Exception as e:
            raise WalkError(generator.name, directory.path, cause=e) from e

        if skip:
            logger.debug("%s skipped the subtree below %s", generator.name, directory.path)
        else:
            child_generators.append(generator)

        if found:
            logger.debug("%s claimed %s", generator.name, directory.path)
            break

    return child_generators
