"""Domain model entities."""

from ssrexternal.domain.model.config import (
    BuildConfig,
    NoExternal,
    NoExternalKind,
    SsrConfig,
    SsrTarget,
)
from ssrexternal.domain.model.decision import Decision, DecisionCache
from ssrexternal.domain.model.manifest import PackageManifest
from ssrexternal.domain.model.report import ExternalsMode, ExternalsReport
from ssrexternal.domain.model.resolution import ResolvedModule, ResolveOptions, is_vendored

__all__ = [
    # Configuration
    "BuildConfig",
    "NoExternal",
    "NoExternalKind",
    "SsrConfig",
    "SsrTarget",
    # Decisions
    "Decision",
    "DecisionCache",
    # Packages
    "PackageManifest",
    "ResolveOptions",
    "ResolvedModule",
    "is_vendored",
    # Reporting
    "ExternalsMode",
    "ExternalsReport",
]
