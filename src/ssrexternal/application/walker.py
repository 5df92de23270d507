"""Legacy externals walker.

Classifies every declared dependency of a project (and of its
workspace-linked packages) as external or bundled by comparing its
module-style and CommonJS-style entries and, when both are the same
file, by sniffing the entry source.

Opt-in: only used when BuildConfig.legacy_externals is set.
"""

from __future__ import annotations

import logging
import re
from collections import deque
from pathlib import Path
from typing import TYPE_CHECKING

from ssrexternal.domain.exceptions.resolution import ResolutionError
from ssrexternal.domain.model.config import SsrTarget
from ssrexternal.domain.model.manifest import MANIFEST_FILENAME
from ssrexternal.domain.model.resolution import ResolveOptions, is_vendored
from ssrexternal.infrastructure.adapters.cached_manifest_reader import CachedManifestReader
from ssrexternal.infrastructure.adapters.json_manifest_reader import JsonManifestReader
from ssrexternal.infrastructure.adapters.node_resolver import (
    NodeModuleResolver,
    NodeRequireResolver,
)

if TYPE_CHECKING:
    from ssrexternal.domain.model.resolution import ResolvedModule
    from ssrexternal.domain.ports.manifest_reader import ManifestReaderPort
    from ssrexternal.domain.ports.resolver import ModuleResolverPort, RequireResolverPort

logger = logging.getLogger(__name__)

CJS_CONTENT_RE = re.compile(
    r"\bmodule\.exports\b"
    r"|\bexports[.\[]"
    r"|\brequire\s*\("
    r"|\bObject\.(defineProperty|defineProperties|assign)\s*\(\s*exports\b"
)

_SNIFFABLE_ENTRY_RE = re.compile(r"\.m?js$")

AMBIGUOUS_FORMAT_WARNING = (
    "{id} doesn't appear to be written in CJS, but also doesn't appear to be a valid "
    'ES module (i.e. it doesn\'t have "type": "module" or an .mjs extension for the '
    "entry point). Please contact the package author to fix."
)


class ExternalsWalker:
    """Walks declared dependencies, filling an external set.

    Each root directory's dependencies are classified in declaration
    order; linked package directories found along the way are queued
    and traced afterwards. Directories are visited once, keyed by
    their resolved path.

    Attributes:
        _esm: Module-aware resolver (ESM conditions)
        _require: CommonJS-style resolver
        _reader: package.json reader
        _logger: Receives user-visible warnings
        _preserve_symlinks: Keep symlinked paths instead of real paths
        _target_web: Resolve module entries with browser conditions
    """

    def __init__(
        self,
        *,
        esm_resolver: ModuleResolverPort,
        require_resolver: RequireResolverPort,
        manifest_reader: ManifestReaderPort,
        logger: logging.Logger,
        preserve_symlinks: bool = False,
        target: SsrTarget = SsrTarget.NODE,
    ) -> None:
        """Initialize walker.

        Raises:
            TypeError: If a collaborator is None
        """
        if esm_resolver is None:
            raise TypeError("esm_resolver must not be None")
        if require_resolver is None:
            raise TypeError("require_resolver must not be None")
        if manifest_reader is None:
            raise TypeError("manifest_reader must not be None")

        self._esm = esm_resolver
        self._require = require_resolver
        self._reader = manifest_reader
        self._logger = logger
        self._preserve_symlinks = preserve_symlinks
        self._target_web = target.is_web_like

    def walk(self, root: Path, externals: set[str], seen: set[str]) -> None:
        """Classify dependencies of root and every linked package it reaches.

        Mutates externals and seen in place.

        Raises:
            ManifestError: If a manifest on the walk cannot be read or parsed
        """
        queue: deque[Path] = deque([root])
        visited: set[Path] = set()

        while queue:
            directory = queue.popleft()
            key = directory.resolve()
            if key in visited:
                continue
            visited.add(key)
            queue.extend(self._collect(directory, externals, seen))

    def _collect(self, root: Path, externals: set[str], seen: set[str]) -> list[Path]:
        """Classify dependencies declared at root; return linked dirs to trace."""
        manifest_path = self._reader.lookup(root)
        if manifest_path is None:
            return []

        manifest = self._reader.read(manifest_path)
        options = ResolveOptions(root=root, preserve_symlinks=self._preserve_symlinks)
        to_trace: list[Path] = []

        for dep in manifest.declared_dependencies():
            if dep in seen:
                continue
            seen.add(dep)

            try:
                esm_entry = self._esm.resolve(dep, options, target_web=self._target_web)
                require_entry = self._require.resolve(dep, root)
            except ResolutionError as e:
                # no main entry, but deep imports may be allowed
                linked = self._locate_package(dep, root, externals, e)
                if linked is not None:
                    to_trace.append(linked)
                continue

            if esm_entry is None:
                # no module entry but has require entry
                externals.add(dep)
            elif not esm_entry.is_vendored:
                to_trace.append(self._package_dir(dep, root, esm_entry))
            elif esm_entry.path != require_entry:
                # separate module/require entries, assume require entry is CJS
                externals.add(dep)
            elif _SNIFFABLE_ENTRY_RE.search(esm_entry.path.name):
                if self._is_loadable_by_host(dep, root, esm_entry):
                    externals.add(dep)

        return to_trace

    def _locate_package(
        self,
        dep: str,
        root: Path,
        externals: set[str],
        error: ResolutionError,
    ) -> Path | None:
        """Handle a dependency whose entries failed to resolve."""
        try:
            manifest_path = self._require.resolve_manifest(dep, root)
        except ResolutionError:
            # resolve failed, assume bundled
            logger.debug('Failed to resolve entries for package "%s": %s', dep, error)
            return None

        if is_vendored(manifest_path):
            externals.add(dep)
            return None
        return manifest_path.parent

    def _package_dir(self, dep: str, root: Path, entry: ResolvedModule) -> Path:
        if entry.package_dir is not None:
            return entry.package_dir
        return self._require.resolve_manifest(dep, root).parent

    def _is_loadable_by_host(self, dep: str, root: Path, entry: ResolvedModule) -> bool:
        """Classify a shared .js/.mjs entry as ESM or CJS by content."""
        manifest = self._reader.read(self._package_dir(dep, root, entry) / MANIFEST_FILENAME)
        if manifest.is_esm or entry.path.suffix == ".mjs":
            return True

        try:
            content = entry.path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug('Failed to read entry of package "%s": %s', dep, e)
            return False

        if CJS_CONTENT_RE.search(content):
            return True

        self._logger.warning(AMBIGUOUS_FORMAT_WARNING.format(id=dep))
        return False


def collect_externals(
    root: Path,
    preserve_symlinks: bool,
    externals: set[str],
    seen: set[str],
    logger: logging.Logger,
    *,
    esm_resolver: ModuleResolverPort | None = None,
    require_resolver: RequireResolverPort | None = None,
    manifest_reader: ManifestReaderPort | None = None,
    target: SsrTarget = SsrTarget.NODE,
) -> None:
    """Collect externals declared at root into externals (in place).

    Dependencies already in seen are skipped; every processed
    dependency is added to seen, external or not.

    Args:
        root: Directory whose package.json (or nearest ancestor's) is walked
        preserve_symlinks: Keep symlinked paths instead of real paths
        externals: External package names, filled in place
        seen: Processed package names, filled in place
        logger: Receives ambiguous-format warnings
        esm_resolver: Module-aware resolver (default: NodeModuleResolver)
        require_resolver: CommonJS resolver (default: NodeRequireResolver)
        manifest_reader: package.json reader (default: cached JsonManifestReader)
        target: Runtime target for module conditions

    Raises:
        ManifestError: If a manifest on the walk cannot be read or parsed
    """
    reader = manifest_reader or CachedManifestReader(JsonManifestReader())
    walker = ExternalsWalker(
        esm_resolver=esm_resolver or NodeModuleResolver(reader),
        require_resolver=require_resolver
        or NodeRequireResolver(reader, preserve_symlinks=preserve_symlinks),
        manifest_reader=reader,
        logger=logger,
        preserve_symlinks=preserve_symlinks,
        target=target,
    )
    walker.walk(root, externals, seen)
