"""Configured externalization policy (ssr.external / ssr.noExternal)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ssrexternal.application.naming import package_name
from ssrexternal.domain.model.config import NoExternalKind
from ssrexternal.domain.model.decision import Decision
from ssrexternal.infrastructure.filters.patterns import create_filter

if TYPE_CHECKING:
    from collections.abc import Callable

    from ssrexternal.domain.model.config import SsrConfig


def create_configured_policy(ssr: SsrConfig) -> Callable[[str], Decision]:
    """Create matcher for explicit ssr.external / ssr.noExternal config.

    Precedence:
    1. exact specifier in external -> EXTERNAL
    2. package name in external -> UNRESOLVED (probe may still reject
       non-JS entries such as CSS; external wins over noExternal)
    3. noExternal ALL -> BUNDLED
    4. noExternal PATTERNS not matching the package name -> BUNDLED
    5. otherwise UNRESOLVED

    Args:
        ssr: SSR section of the build config

    Returns:
        Function mapping a specifier to a Decision.
    """
    no_external = ssr.no_external
    keep = (
        create_filter(exclude=no_external.patterns)
        if no_external.kind is NoExternalKind.PATTERNS
        else None
    )

    def _policy(specifier: str) -> Decision:
        pkg_name = package_name(specifier)
        if not pkg_name:
            return Decision.UNRESOLVED

        if specifier in ssr.external:
            return Decision.EXTERNAL
        if pkg_name in ssr.external:
            return Decision.UNRESOLVED

        match no_external.kind:
            case NoExternalKind.ALL:
                return Decision.BUNDLED
            case NoExternalKind.PATTERNS:
                if keep is not None and keep(pkg_name):
                    return Decision.UNRESOLVED
                return Decision.BUNDLED
            case NoExternalKind.NONE:
                return Decision.UNRESOLVED

    return _policy


def configured_policy(specifier: str, ssr: SsrConfig) -> Decision:
    """One-shot form of create_configured_policy()."""
    return create_configured_policy(ssr)(specifier)
