"""Facade for SSR externalization.

Entry point used by the build: one instance per resolved configuration.

Example:
    externals = SsrExternals(BuildConfig(root=Path("/app")))
    externals.is_external("react")        # True
    externals.is_external("./App.vue")    # False
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from ssrexternal.application.aggregate import resolve_externals
from ssrexternal.application.decision import should_externalize
from ssrexternal.application.naming import prefix_match
from ssrexternal.domain.model.config import BuildConfig
from ssrexternal.domain.model.report import ExternalsMode, ExternalsReport
from ssrexternal.infrastructure.adapters.cached_manifest_reader import CachedManifestReader
from ssrexternal.infrastructure.adapters.json_manifest_reader import JsonManifestReader
from ssrexternal.infrastructure.adapters.node_resolver import (
    NodeModuleResolver,
    NodeRequireResolver,
)

if TYPE_CHECKING:
    import logging

    from ssrexternal.domain.ports.manifest_reader import ManifestReaderPort
    from ssrexternal.domain.ports.resolver import ModuleResolverPort, RequireResolverPort


class SsrExternals:
    """Decide externalization for one build configuration.

    Default mode: per-specifier memoized decision (should_externalize).
    Legacy mode (config.legacy_externals): the aggregate externals list
    is computed on first use, then specifiers are matched against it.

    Attributes:
        _config: Build configuration
        _known_imports: Bare imports found while scanning the app
        _resolver: Module-aware resolver
        _require_resolver: CommonJS resolver (legacy mode)
        _manifest_reader: package.json reader shared by the resolvers
        _externals: Legacy externals list, None until computed
    """

    def __init__(
        self,
        config: BuildConfig,
        *,
        known_imports: Iterable[str] = (),
        resolver: ModuleResolverPort | None = None,
        require_resolver: RequireResolverPort | None = None,
        manifest_reader: ManifestReaderPort | None = None,
    ) -> None:
        """Initialize facade.

        Args:
            config: Build configuration
            known_imports: Bare imports found while scanning the app (legacy mode)
            resolver: Module-aware resolver (default: NodeModuleResolver)
            require_resolver: CommonJS resolver (default: NodeRequireResolver)
            manifest_reader: package.json reader (default: cached JsonManifestReader)

        Raises:
            TypeError: If config is None
        """
        if config is None:
            raise TypeError("config must not be None")

        self._config = config
        self._known_imports = tuple(known_imports)
        self._manifest_reader = manifest_reader or CachedManifestReader(JsonManifestReader())
        self._resolver = resolver or NodeModuleResolver(self._manifest_reader)
        self._require_resolver = require_resolver or NodeRequireResolver(
            self._manifest_reader, preserve_symlinks=config.preserve_symlinks
        )
        self._externals: tuple[str, ...] | None = None

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, object],
        *,
        logger: logging.Logger | None = None,
        known_imports: Iterable[str] = (),
    ) -> SsrExternals:
        """Create facade from a Vite-shaped configuration mapping.

        Raises:
            ConfigurationError: If a field has the wrong shape
        """
        return cls(BuildConfig.from_mapping(data, logger=logger), known_imports=known_imports)

    @property
    def config(self) -> BuildConfig:
        """Build configuration."""
        return self._config

    @property
    def mode(self) -> ExternalsMode:
        """Decision mode selected by configuration."""
        return ExternalsMode.LEGACY if self._config.legacy_externals else ExternalsMode.DEFAULT

    def is_external(self, specifier: str) -> bool:
        """Whether specifier is loaded by the host module loader at runtime.

        Raises:
            ManifestError: Legacy mode, when a manifest on the walk is broken
        """
        if self.mode is ExternalsMode.LEGACY:
            return prefix_match(specifier, self.externals())
        return should_externalize(specifier, self._config, self._resolver)

    def externals(self) -> tuple[str, ...]:
        """Aggregate externals list (legacy mode), empty in default mode.

        Computed once per instance.

        Raises:
            ManifestError: If a manifest on the walk is broken
        """
        if self.mode is ExternalsMode.DEFAULT:
            return ()
        if self._externals is None:
            self._externals = tuple(
                resolve_externals(
                    self._config,
                    self._known_imports,
                    esm_resolver=self._resolver,
                    require_resolver=self._require_resolver,
                    manifest_reader=self._manifest_reader,
                )
            )
        return self._externals

    def report(self, specifiers: Iterable[str] = ()) -> ExternalsReport:
        """Decide every specifier and collect the outcome.

        Args:
            specifiers: Import specifiers to decide

        Returns:
            Report with externals list (legacy mode) and decisions
        """
        decisions = {specifier: self.is_external(specifier) for specifier in specifiers}
        return ExternalsReport(
            root=self._config.root,
            mode=self.mode,
            externals=self.externals(),
            decisions=MappingProxyType(decisions),
        )
