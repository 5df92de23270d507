"""package.json reader adapter."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from ssrexternal.domain.exceptions.manifest import ManifestParseError, ManifestReadError
from ssrexternal.domain.model.manifest import MANIFEST_FILENAME, PackageManifest
from ssrexternal.domain.ports.manifest_reader import ManifestReaderPort


class JsonManifestReader(ManifestReaderPort):
    """Reads package.json files with the stdlib json module.

    Malformed JSON is a fatal ManifestParseError, never recovered.
    """

    def read(self, path: Path) -> PackageManifest:
        """Read and parse a package.json file.

        Raises:
            ManifestReadError: If file cannot be read
            ManifestParseError: If content is not UTF-8 encoded JSON object
        """
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ManifestReadError(path, str(e) or type(e).__name__) from e
        except UnicodeDecodeError as e:
            raise ManifestParseError(path, str(e)) from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ManifestParseError(path, str(e)) from e

        if not isinstance(data, Mapping):
            raise ManifestParseError(path, f"expected JSON object, got {type(data).__name__}")

        return PackageManifest.from_dict(path, data)

    def lookup(self, start: Path) -> Path | None:
        """Find the nearest package.json at or above start."""
        for directory in (start, *start.parents):
            candidate = directory / MANIFEST_FILENAME
            if candidate.is_file():
                return candidate
        return None
