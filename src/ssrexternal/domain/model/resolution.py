"""Module resolution value objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

VENDOR_DIRNAME = "node_modules"


@dataclass(frozen=True, slots=True)
class ResolveOptions:
    """Options passed to the module resolver.

    Attributes:
        root: Directory lookups start from
        preserve_symlinks: Keep symlinked paths instead of real paths
        is_production: Production build
        is_build: Build (as opposed to dev server)
    """

    root: Path
    preserve_symlinks: bool = False
    is_production: bool = False
    is_build: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.root is None:
            raise TypeError("root must not be None")


@dataclass(frozen=True, slots=True)
class ResolvedModule:
    """Result of resolving an import specifier.

    Attributes:
        id: Specifier that was resolved
        path: Entry file on disk
        package_dir: Root directory of the owning package
    """

    id: str
    path: Path
    package_dir: Path | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.id:
            raise ValueError("id must not be empty")
        if self.path is None:
            raise TypeError("path must not be None")

    @property
    def is_vendored(self) -> bool:
        """Whether the entry lives in an installed-package tree."""
        return is_vendored(self.path)


def is_vendored(path: Path) -> bool:
    """Whether path lies inside a node_modules directory."""
    return VENDOR_DIRNAME in path.parts
