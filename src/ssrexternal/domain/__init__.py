"""ssrexternal domain layer.

Pure domain logic with no external dependencies.
"""

from ssrexternal.domain.exceptions import (
    ConfigurationError,
    ManifestError,
    ManifestParseError,
    ManifestReadError,
    ResolutionError,
    SsrExternalError,
)
from ssrexternal.domain.model import (
    BuildConfig,
    Decision,
    DecisionCache,
    ExternalsMode,
    ExternalsReport,
    NoExternal,
    NoExternalKind,
    PackageManifest,
    ResolvedModule,
    ResolveOptions,
    SsrConfig,
    SsrTarget,
)
from ssrexternal.domain.ports import (
    ManifestReaderPort,
    ModuleResolverPort,
    RequireResolverPort,
)

__all__ = [
    # Exceptions
    "SsrExternalError",
    "ConfigurationError",
    "ManifestError",
    "ManifestParseError",
    "ManifestReadError",
    "ResolutionError",
    # Configuration
    "BuildConfig",
    "SsrConfig",
    "SsrTarget",
    "NoExternal",
    "NoExternalKind",
    # Value objects
    "Decision",
    "DecisionCache",
    "PackageManifest",
    "ResolveOptions",
    "ResolvedModule",
    "ExternalsMode",
    "ExternalsReport",
    # Ports
    "ManifestReaderPort",
    "ModuleResolverPort",
    "RequireResolverPort",
]
