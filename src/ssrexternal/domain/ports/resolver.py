"""Module resolver ports (interfaces)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from ssrexternal.domain.model.resolution import ResolvedModule, ResolveOptions


class ModuleResolverPort(ABC):
    """Port for module-aware (ESM conditions) resolution.

    Infrastructure layer must provide implementation.
    """

    @abstractmethod
    def resolve(
        self,
        specifier: str,
        options: ResolveOptions,
        *,
        target_web: bool,
        externalize: bool = False,
    ) -> ResolvedModule | None:
        """Resolve a bare specifier to its module-style entry.

        Args:
            specifier: Bare import specifier
            options: Resolution options
            target_web: Use web-like (browser) conditions instead of node
            externalize: Probe mode: never raise, return None unless
                the specifier can be loaded by the host module loader

        Returns:
            Resolved entry, or None if the package has no entry under
            the module conditions (or, in probe mode, on any failure)

        Raises:
            ResolutionError: Package cannot be located (non-probe mode)
        """
        ...


class RequireResolverPort(ABC):
    """Port for plain CommonJS-style (require) resolution.

    Infrastructure layer must provide implementation.
    """

    @abstractmethod
    def resolve(self, specifier: str, basedir: Path) -> Path:
        """Resolve specifier the way require() would from basedir.

        Raises:
            ResolutionError: If specifier cannot be resolved
        """
        ...

    @abstractmethod
    def resolve_manifest(self, package: str, basedir: Path) -> Path:
        """Locate <package>/package.json from basedir.

        Works for packages that expose no main entry.

        Raises:
            ResolutionError: If the package cannot be located
        """
        ...
