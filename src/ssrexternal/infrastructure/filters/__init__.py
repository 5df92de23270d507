"""Name filters for include/exclude configuration.

Usage:
    from ssrexternal.infrastructure.filters import create_filter

    keep = create_filter(exclude=["@scope/*", re.compile(r"-ui$")])
    keep("react")  # True
"""

from ssrexternal.infrastructure.filters.patterns import create_filter, matches
from ssrexternal.infrastructure.filters.types import NameFilter

__all__ = [
    "NameFilter",
    "create_filter",
    "matches",
]
