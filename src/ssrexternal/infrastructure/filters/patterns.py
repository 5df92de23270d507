"""Include/exclude pattern filters over raw package names.

String patterns use fnmatch (* matches any character including /).
Compiled regexes match anywhere in the name (re.search).
No filesystem resolution is applied to names or patterns.
"""

from __future__ import annotations

import fnmatch
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ssrexternal.domain.model.config import Pattern
    from ssrexternal.infrastructure.filters.types import NameFilter

VIRTUAL_MODULE_SENTINEL = "\0"


def matches(name: str, pattern: Pattern) -> bool:
    """Check whether name matches a single pattern."""
    if isinstance(pattern, re.Pattern):
        return pattern.search(name) is not None
    return fnmatch.fnmatchcase(name, pattern)


def create_filter(
    include: Iterable[Pattern] | None = None,
    exclude: Iterable[Pattern] | None = None,
) -> NameFilter:
    """Create filter that keeps names matching include and not exclude.

    Exclude wins over include. With no include patterns every
    non-excluded name is kept. Names carrying the virtual-module
    sentinel are never kept.

    Args:
        include: Patterns a name must match (None = all names)
        exclude: Patterns a name must not match

    Returns:
        Predicate returning True for names to keep.
    """
    include_patterns = tuple(include or ())
    exclude_patterns = tuple(exclude or ())

    def _filter(name: str) -> bool:
        if VIRTUAL_MODULE_SENTINEL in name:
            return False
        if any(matches(name, p) for p in exclude_patterns):
            return False
        if include_patterns:
            return any(matches(name, p) for p in include_patterns)
        return True

    return _filter
