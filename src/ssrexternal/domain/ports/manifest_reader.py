"""Manifest reader port (interface)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from ssrexternal.domain.model.manifest import PackageManifest


class ManifestReaderPort(ABC):
    """Port for reading package.json files.

    Infrastructure layer must provide implementation.
    """

    @abstractmethod
    def read(self, path: Path) -> PackageManifest:
        """Read and parse a package.json file.

        Args:
            path: Path to package.json

        Returns:
            Parsed manifest

        Raises:
            ManifestReadError: If file cannot be read
            ManifestParseError: If content is not a JSON object
        """
        ...

    @abstractmethod
    def lookup(self, start: Path) -> Path | None:
        """Find the nearest package.json at or above start.

        Args:
            start: Directory to search from

        Returns:
            Path to package.json, or None if none exists up to the filesystem root
        """
        ...
