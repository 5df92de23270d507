"""Application layer for SSR externalization.

Components:
- naming: package name / nesting / prefix helpers
- policy: explicit ssr.external / ssr.noExternal matcher
- probe: resolver-backed externalizability check
- decision: per-config memoized decision (default mode)
- walker, aggregate: dependency-graph walker (legacy mode)
- reporters: output formatting (Console, JSON)
"""

from ssrexternal.application.aggregate import resolve_externals
from ssrexternal.application.decision import create_is_ssr_external, should_externalize
from ssrexternal.application.naming import package_name, prefix_match, strip_nesting
from ssrexternal.application.policy import configured_policy, create_configured_policy
from ssrexternal.application.probe import ExternalizableProbe
from ssrexternal.application.reporters import (
    BaseReporter,
    ConsoleReporter,
    JSONReporter,
)
from ssrexternal.application.walker import ExternalsWalker, collect_externals

__all__ = [
    # Naming
    "package_name",
    "prefix_match",
    "strip_nesting",
    # Default mode
    "configured_policy",
    "create_configured_policy",
    "ExternalizableProbe",
    "create_is_ssr_external",
    "should_externalize",
    # Legacy mode
    "ExternalsWalker",
    "collect_externals",
    "resolve_externals",
    # Reporters
    "BaseReporter",
    "ConsoleReporter",
    "JSONReporter",
]
