"""Cached manifest reader adapter.

Decorator pattern: wraps ManifestReaderPort with path-keyed caching.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ssrexternal.domain.model.manifest import PackageManifest
from ssrexternal.domain.ports.manifest_reader import ManifestReaderPort


@dataclass
class CachedManifestReader(ManifestReaderPort):
    """Reader with path-keyed caching.

    Decorator pattern: wraps another ManifestReaderPort.
    Manifests are read once per reader lifetime (one build).
    Failures are not cached: a failing read raises every time.

    Cache is in-memory only - no persistence between runs.

    Attributes:
        _inner: Wrapped reader implementation
        _cache: Path -> PackageManifest mapping
    """

    _inner: ManifestReaderPort
    _cache: dict[Path, PackageManifest] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self._inner is None:
            raise TypeError("_inner reader must not be None")

    def read(self, path: Path) -> PackageManifest:
        """Read with cache lookup.

        Raises:
            ManifestReadError: If file cannot be read
            ManifestParseError: If content is not a JSON object
        """
        cached = self._cache.get(path)
        if cached is not None:
            return cached

        manifest = self._inner.read(path)
        self._cache[path] = manifest
        return manifest

    def lookup(self, start: Path) -> Path | None:
        """Find nearest package.json (delegates to inner reader)."""
        return self._inner.lookup(start)

    def clear(self) -> None:
        """Clear entire cache."""
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        """Number of cached manifests."""
        return len(self._cache)
