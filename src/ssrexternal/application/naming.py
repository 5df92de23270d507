"""Package name and path helpers for import specifiers."""

from __future__ import annotations

import posixpath
from collections.abc import Iterable, Sequence

NESTING_SEPARATOR = ">"


def package_name(specifier: str) -> str | None:
    """Derive the package name of an import specifier.

    Scoped names keep both segments.

    Example:
        >>> package_name("@scope/pkg/sub"), package_name("lodash/debounce")
        ('@scope/pkg', 'lodash')
        >>> package_name("@solo") is None
        True
    """
    parts = specifier.split("/")
    if parts[0].startswith("@"):
        if len(parts) < 2 or not parts[1]:
            return None
        return f"{parts[0]}/{parts[1]}"
    return parts[0]


def strip_nesting(packages: Iterable[str]) -> list[str]:
    """Convert "parent > child" entries to just "child".

    Example:
        >>> strip_nesting(["a > b > c", "solo"])
        ['c', 'solo']
    """
    return [entry.split(NESTING_SEPARATOR)[-1].strip() for entry in packages]


def prefix_match(specifier: str, externals: Sequence[str] | None) -> bool:
    """Check specifier against an externals list.

    Deep imports of an external package are external too, but only
    extension-less paths and explicit .js paths.

    Args:
        specifier: Import specifier
        externals: Aggregate externals list, None if not computed

    Returns:
        True if specifier should be loaded by the host module loader
    """
    if not externals:
        return False
    for external in externals:
        if specifier == external:
            return True
        if specifier.startswith(f"{external}/"):
            ext = posixpath.splitext(specifier)[1]
            if not ext or specifier.endswith(".js"):
                return True
    return False


def is_relative_or_absolute(specifier: str) -> bool:
    """Whether specifier is a relative ("."-prefixed) or absolute path."""
    return specifier.startswith(".") or posixpath.isabs(specifier) or _is_windows_absolute(specifier)


def _is_windows_absolute(specifier: str) -> bool:
    return len(specifier) > 2 and specifier[0].isalpha() and specifier[1] == ":" and specifier[2] in "/\\"
