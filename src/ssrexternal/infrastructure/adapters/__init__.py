"""Infrastructure adapters implementing domain ports."""

from ssrexternal.infrastructure.adapters.cached_manifest_reader import CachedManifestReader
from ssrexternal.infrastructure.adapters.json_manifest_reader import JsonManifestReader
from ssrexternal.infrastructure.adapters.node_resolver import (
    NodeModuleResolver,
    NodeRequireResolver,
)

__all__ = [
    "CachedManifestReader",
    "JsonManifestReader",
    "NodeModuleResolver",
    "NodeRequireResolver",
]
