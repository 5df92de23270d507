"""Resolver-backed externalizability probe."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ssrexternal.infrastructure.adapters.node_resolver import BARE_IMPORT_RE
from ssrexternal.infrastructure.filters.patterns import VIRTUAL_MODULE_SENTINEL

if TYPE_CHECKING:
    from ssrexternal.domain.model.config import SsrTarget
    from ssrexternal.domain.model.resolution import ResolveOptions
    from ssrexternal.domain.ports.resolver import ModuleResolverPort


@dataclass(frozen=True, slots=True)
class ExternalizableProbe:
    """Ask the module resolver whether a bare import can be externalized.

    Attributes:
        resolver: Module-aware resolver (queried in externalize mode)
        options: Resolution options derived from the build config
        target: Runtime target; web-like targets use browser conditions
    """

    resolver: ModuleResolverPort
    options: ResolveOptions
    target: SsrTarget

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.resolver is None:
            raise TypeError("resolver must not be None")
        if self.options is None:
            raise TypeError("options must not be None")

    def __call__(self, specifier: str) -> bool:
        """True if specifier resolves to a JS entry the host can load."""
        if not BARE_IMPORT_RE.match(specifier) or VIRTUAL_MODULE_SENTINEL in specifier:
            return False
        resolved = self.resolver.resolve(
            specifier,
            self.options,
            target_web=self.target.is_web_like,
            externalize=True,
        )
        return resolved is not None
