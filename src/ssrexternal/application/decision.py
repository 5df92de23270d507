"""Per-configuration memoized externalization decision.

Default-mode entry point: every import seen while producing the server
bundle is routed through should_externalize().
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ssrexternal.application.naming import is_relative_or_absolute
from ssrexternal.application.policy import create_configured_policy
from ssrexternal.application.probe import ExternalizableProbe
from ssrexternal.domain.model.decision import DecisionCache
from ssrexternal.domain.model.resolution import ResolveOptions
from ssrexternal.infrastructure.adapters.node_resolver import NodeModuleResolver
from ssrexternal.infrastructure.builtins import is_builtin

if TYPE_CHECKING:
    from ssrexternal.domain.model.config import BuildConfig
    from ssrexternal.domain.model.decision import Decider
    from ssrexternal.domain.ports.resolver import ModuleResolverPort

logger = logging.getLogger(__name__)


def resolve_options(config: BuildConfig) -> ResolveOptions:
    """Resolution options used for externalization checks."""
    return ResolveOptions(
        root=config.root,
        preserve_symlinks=config.preserve_symlinks,
        is_production=False,
        is_build=True,
    )


def create_is_ssr_external(
    config: BuildConfig,
    resolver: ModuleResolverPort | None = None,
    cache: DecisionCache | None = None,
) -> Decider:
    """Create memoized decision function for one configuration.

    Decision per specifier:
    - relative or absolute path -> bundled
    - host built-in -> external
    - otherwise configured policy, falling back to the resolver probe
      when the policy is UNRESOLVED

    Args:
        config: Build configuration
        resolver: Module-aware resolver (default: NodeModuleResolver)
        cache: Memo to fill (default: a fresh one)

    Returns:
        Function mapping a specifier to "is external".
    """
    memo = cache if cache is not None else DecisionCache()
    policy = create_configured_policy(config.ssr)
    probe = ExternalizableProbe(
        resolver=resolver if resolver is not None else NodeModuleResolver(),
        options=resolve_options(config),
        target=config.ssr.target,
    )

    def _is_external(specifier: str) -> bool:
        cached = memo.get(specifier)
        if cached is not None:
            return cached

        external = False
        if not is_relative_or_absolute(specifier):
            external = is_builtin(specifier) or policy(specifier).or_else(lambda: probe(specifier))

        logger.debug("%s -> %s", specifier, "external" if external else "bundled")
        return memo.store(specifier, external)

    return _is_external


def should_externalize(
    specifier: str,
    config: BuildConfig,
    resolver: ModuleResolverPort | None = None,
) -> bool:
    """Decide whether specifier is loaded by the host module loader.

    The decision function is built on first use and kept in
    config.decision_cache; resolver only applies to that first call.

    Args:
        specifier: Import specifier
        config: Build configuration owning the cache
        resolver: Module-aware resolver (default: NodeModuleResolver)

    Returns:
        True to externalize, False to bundle.
    """
    cache = config.decision_cache
    decide = cache.decider(lambda: create_is_ssr_external(config, resolver, cache))
    return decide(specifier)
