"""Domain exceptions."""

from ssrexternal.domain.exceptions.base import SsrExternalError
from ssrexternal.domain.exceptions.configuration import ConfigurationError
from ssrexternal.domain.exceptions.manifest import (
    ManifestError,
    ManifestParseError,
    ManifestReadError,
)
from ssrexternal.domain.exceptions.resolution import ResolutionError

__all__ = [
    "SsrExternalError",
    "ConfigurationError",
    "ManifestError",
    "ManifestParseError",
    "ManifestReadError",
    "ResolutionError",
]
