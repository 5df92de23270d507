"""Filesystem module resolution over node_modules trees.

Two resolvers share one lookup algorithm but apply different
module-condition sets:
- NodeModuleResolver: ESM conditions (import/module), module entry fields
- NodeRequireResolver: CommonJS conditions (require), main field only

Lookup: walk up from the base directory, checking
<dir>/node_modules/<package>/package.json at each level.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path

from ssrexternal.domain.exceptions.base import SsrExternalError
from ssrexternal.domain.exceptions.resolution import ResolutionError
from ssrexternal.domain.model.manifest import MANIFEST_FILENAME, PackageManifest
from ssrexternal.domain.model.resolution import VENDOR_DIRNAME, ResolvedModule, ResolveOptions
from ssrexternal.domain.ports.manifest_reader import ManifestReaderPort
from ssrexternal.domain.ports.resolver import ModuleResolverPort, RequireResolverPort
from ssrexternal.infrastructure.adapters.json_manifest_reader import JsonManifestReader

logger = logging.getLogger(__name__)

# Starts with a word char or @, is not a drive letter, is not a URL
BARE_IMPORT_RE = re.compile(r"^(?![a-zA-Z]:)[\w@](?!.*://)")

JS_EXTENSIONS = (".js", ".mjs", ".cjs")
MODULE_EXTENSIONS = (".mjs", ".js", ".ts", ".jsx", ".tsx", ".json")
REQUIRE_EXTENSIONS = (".js", ".json", ".node")
REQUIRE_CONDITIONS = frozenset({"require", "node", "default"})


def module_conditions(*, target_web: bool, is_production: bool = False) -> frozenset[str]:
    """Export conditions applied by module-aware resolution."""
    return frozenset(
        {
            "import",
            "module",
            "default",
            "browser" if target_web else "node",
            "production" if is_production else "development",
        }
    )


def split_specifier(specifier: str) -> tuple[str, str]:
    """Split a bare specifier into package name and exports subpath.

    Query and hash suffixes are dropped.

    Example:
        >>> split_specifier("@scope/pkg/sub?raw")
        ('@scope/pkg', './sub')

    Raises:
        ResolutionError: If specifier is not a bare package import
    """
    clean = re.split(r"[?#]", specifier, maxsplit=1)[0]
    if not BARE_IMPORT_RE.match(clean):
        raise ResolutionError(specifier, "not a bare import")

    parts = clean.split("/")
    count = 2 if clean.startswith("@") else 1
    if len(parts) < count or not all(parts[:count]):
        raise ResolutionError(specifier, "invalid package name")

    name = "/".join(parts[:count])
    rest = "/".join(parts[count:])
    return name, f"./{rest}" if rest else "."


def find_package_dir(name: str, basedir: Path) -> Path | None:
    """Find node_modules/<name> at or above basedir."""
    for directory in (basedir, *basedir.parents):
        if directory.name == VENDOR_DIRNAME:
            continue
        candidate = directory / VENDOR_DIRNAME / name
        if (candidate / MANIFEST_FILENAME).is_file():
            return candidate
    return None


def canonical(path: Path, preserve_symlinks: bool) -> Path:
    """Normalize path; resolve symlinks unless preserving them."""
    if preserve_symlinks:
        return Path(os.path.normpath(path))
    return path.resolve()


def resolve_exports(exports: object, subpath: str, conditions: frozenset[str]) -> str | None:
    """Resolve a subpath through a package "exports" field.

    Supports string/array/conditions sugar for ".", exact subpath keys
    and single-"*" subpath patterns. Conditions are tried in object
    key order; "default" always matches.

    Returns:
        Target path relative to the package root, or None if not exported
    """
    if not isinstance(exports, Mapping) or not any(str(k).startswith(".") for k in exports):
        exports = {".": exports}

    if subpath in exports:
        return _resolve_target(exports[subpath], conditions)

    best: tuple[str, object] | None = None
    for key, value in exports.items():
        prefix, star, suffix = str(key).partition("*")
        if not star or "*" in suffix:
            continue
        if (
            subpath.startswith(prefix)
            and subpath.endswith(suffix)
            and len(subpath) >= len(prefix) + len(suffix)
            and (best is None or len(prefix) > len(best[0].partition("*")[0]))
        ):
            best = (str(key), value)

    if best is None:
        return None

    key, value = best
    prefix, _, suffix = key.partition("*")
    target = _resolve_target(value, conditions)
    if target is None:
        return None
    return target.replace("*", subpath[len(prefix) : len(subpath) - len(suffix)])


def _resolve_target(target: object, conditions: frozenset[str]) -> str | None:
    if isinstance(target, str):
        return target
    if isinstance(target, list):
        for item in target:
            resolved = _resolve_target(item, conditions)
            if resolved is not None:
                return resolved
        return None
    if isinstance(target, Mapping):
        for condition, value in target.items():
            if condition == "default" or condition in conditions:
                resolved = _resolve_target(value, conditions)
                if resolved is not None:
                    return resolved
        return None
    # null target: explicitly not exported
    return None


def try_file(path: Path, extensions: tuple[str, ...]) -> Path | None:
    """Find an existing file: exact, with extension, or directory index."""
    if path.is_file():
        return path
    for ext in extensions:
        candidate = path.with_name(path.name + ext)
        if candidate.is_file():
            return candidate
    if path.is_dir():
        for ext in extensions:
            candidate = path / f"index{ext}"
            if candidate.is_file():
                return candidate
    return None


class _PackageLookup:
    """Locate and read package manifests from a base directory."""

    def __init__(self, manifest_reader: ManifestReaderPort | None) -> None:
        self._reader = manifest_reader if manifest_reader is not None else JsonManifestReader()

    def package(
        self,
        specifier: str,
        name: str,
        basedir: Path,
        preserve_symlinks: bool,
    ) -> tuple[Path, PackageManifest]:
        package_dir = find_package_dir(name, basedir)
        if package_dir is None:
            raise ResolutionError(specifier, f"package '{name}' not found from {basedir}")
        package_dir = canonical(package_dir, preserve_symlinks)
        return package_dir, self._reader.read(package_dir / MANIFEST_FILENAME)


class NodeModuleResolver(ModuleResolverPort):
    """Module-aware resolver: ESM export conditions, module entry field.

    In externalize (probe) mode, never raises and only returns entries
    the host module loader can load (.js, .mjs, .cjs).
    """

    def __init__(self, manifest_reader: ManifestReaderPort | None = None) -> None:
        """Initialize resolver.

        Args:
            manifest_reader: Reader for package.json files (default: JsonManifestReader)
        """
        self._lookup = _PackageLookup(manifest_reader)

    def resolve(
        self,
        specifier: str,
        options: ResolveOptions,
        *,
        target_web: bool,
        externalize: bool = False,
    ) -> ResolvedModule | None:
        """Resolve a bare specifier to its module-style entry.

        Raises:
            ResolutionError: Package cannot be located (non-probe mode)
            ManifestError: Package manifest is unreadable (non-probe mode)
        """
        if not externalize:
            return self._resolve(specifier, options, target_web)

        try:
            resolved = self._resolve(specifier, options, target_web)
        except SsrExternalError as e:
            logger.debug("cannot externalize %s: %s", specifier, e)
            return None

        if resolved is None:
            return None
        if resolved.path.suffix not in JS_EXTENSIONS:
            logger.debug("cannot externalize %s: non-JS entry %s", specifier, resolved.path)
            return None
        return resolved

    def _resolve(
        self,
        specifier: str,
        options: ResolveOptions,
        target_web: bool,
    ) -> ResolvedModule | None:
        name, subpath = split_specifier(specifier)
        package_dir, manifest = self._lookup.package(
            specifier, name, options.root, options.preserve_symlinks
        )

        if manifest.exports is not None:
            conditions = module_conditions(
                target_web=target_web, is_production=options.is_production
            )
            target = resolve_exports(manifest.exports, subpath, conditions)
            if target is None:
                return None
            entry = try_file(package_dir / target, ())
        elif subpath == ".":
            entry = self._main_entry(package_dir, manifest, target_web)
        else:
            entry = try_file(package_dir / subpath[2:], MODULE_EXTENSIONS)

        if entry is None:
            return None
        return ResolvedModule(
            id=specifier,
            path=canonical(entry, options.preserve_symlinks),
            package_dir=package_dir,
        )

    def _main_entry(self, package_dir: Path, manifest: PackageManifest, target_web: bool) -> Path | None:
        fields = (manifest.browser if target_web else None, manifest.module, manifest.main)
        for entry_field in fields:
            if entry_field:
                entry = try_file(package_dir / entry_field, MODULE_EXTENSIONS)
                if entry is not None:
                    return entry
        return try_file(package_dir / "index", MODULE_EXTENSIONS)


class NodeRequireResolver(RequireResolverPort):
    """Plain CommonJS-style resolver: require conditions, main field."""

    def __init__(
        self,
        manifest_reader: ManifestReaderPort | None = None,
        *,
        preserve_symlinks: bool = False,
    ) -> None:
        """Initialize resolver.

        Args:
            manifest_reader: Reader for package.json files (default: JsonManifestReader)
            preserve_symlinks: Keep symlinked paths instead of real paths
        """
        self._lookup = _PackageLookup(manifest_reader)
        self._preserve_symlinks = preserve_symlinks

    def resolve(self, specifier: str, basedir: Path) -> Path:
        """Resolve specifier the way require() would from basedir.

        Raises:
            ResolutionError: If specifier cannot be resolved
            ManifestError: Package manifest is unreadable
        """
        name, subpath = split_specifier(specifier)
        package_dir, manifest = self._lookup.package(
            specifier, name, basedir, self._preserve_symlinks
        )

        if manifest.exports is not None:
            target = resolve_exports(manifest.exports, subpath, REQUIRE_CONDITIONS)
            if target is None:
                raise ResolutionError(specifier, f"'{subpath}' is not exported for require")
            entry = try_file(package_dir / target, ())
        elif subpath == ".":
            entry = None
            if manifest.main:
                entry = try_file(package_dir / manifest.main, REQUIRE_EXTENSIONS)
            if entry is None:
                entry = try_file(package_dir / "index", REQUIRE_EXTENSIONS)
        else:
            entry = try_file(package_dir / subpath[2:], REQUIRE_EXTENSIONS)

        if entry is None:
            raise ResolutionError(specifier, f"no entry file in {package_dir}")
        return canonical(entry, self._preserve_symlinks)

    def resolve_manifest(self, package: str, basedir: Path) -> Path:
        """Locate <package>/package.json from basedir, ignoring "exports".

        Raises:
            ResolutionError: If the package cannot be located
        """
        name, _ = split_specifier(package)
        package_dir = find_package_dir(name, basedir)
        if package_dir is None:
            raise ResolutionError(package, f"package '{name}' not found from {basedir}")
        return canonical(package_dir, self._preserve_symlinks) / MANIFEST_FILENAME
