"""Domain ports (interfaces)."""

from ssrexternal.domain.ports.manifest_reader import ManifestReaderPort
from ssrexternal.domain.ports.resolver import ModuleResolverPort, RequireResolverPort

__all__ = [
    "ManifestReaderPort",
    "ModuleResolverPort",
    "RequireResolverPort",
]
