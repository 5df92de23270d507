"""Aggregate externals list for legacy mode."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from ssrexternal.application.naming import package_name, strip_nesting
from ssrexternal.application.walker import collect_externals
from ssrexternal.domain.model.config import NoExternalKind
from ssrexternal.infrastructure.filters.patterns import create_filter

if TYPE_CHECKING:
    from ssrexternal.domain.model.config import BuildConfig
    from ssrexternal.domain.ports.manifest_reader import ManifestReaderPort
    from ssrexternal.domain.ports.resolver import ModuleResolverPort, RequireResolverPort


def resolve_externals(
    config: BuildConfig,
    known_imports: Iterable[str],
    *,
    esm_resolver: ModuleResolverPort | None = None,
    require_resolver: RequireResolverPort | None = None,
    manifest_reader: ManifestReaderPort | None = None,
) -> list[str]:
    """Build the list of package names to externalize.

    Walks the project's dependencies, then assumes external every known
    import whose package was never seen by the walk: the project root
    and linked packages are fully traced at that point, so such a
    package is a dependency of something inside node_modules.

    Args:
        config: Build configuration
        known_imports: Bare imports found while scanning the app,
            may use "parent > child" notation
        esm_resolver: Module-aware resolver (default: NodeModuleResolver)
        require_resolver: CommonJS resolver (default: NodeRequireResolver)
        manifest_reader: package.json reader (default: cached JsonManifestReader)

    Returns:
        External package names, sorted

    Raises:
        ManifestError: If a manifest on the walk cannot be read or parsed
    """
    imports = strip_nesting(known_imports)

    ssr = config.ssr
    if ssr.no_external.kind is NoExternalKind.ALL:
        return []

    externals: set[str] = set(ssr.external)
    seen: set[str] = set(ssr.external)

    collect_externals(
        config.root,
        config.preserve_symlinks,
        externals,
        seen,
        config.logger,
        esm_resolver=esm_resolver,
        require_resolver=require_resolver,
        manifest_reader=manifest_reader,
        target=ssr.target,
    )

    for name in (package_name(imp) for imp in imports):
        if name and name not in seen:
            externals.add(name)

    # the build tool's runtime helpers must stay bundled
    externals.discard(config.tool_package)

    result = sorted(externals)
    if ssr.no_external.kind is NoExternalKind.PATTERNS:
        keep = create_filter(exclude=ssr.no_external.patterns)
        result = [name for name in result if keep(name)]
    return result
