"""Manifest (package.json) exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from ssrexternal.domain.exceptions.base import SsrExternalError

if TYPE_CHECKING:
    from pathlib import Path


class ManifestError(SsrExternalError):
    """Error while loading a package manifest.

    Manifest errors are fatal: they abort the enclosing walk.

    Attributes:
        path: Manifest file that failed to load
        reason: Why loading failed
    """

    _prefix: ClassVar[str] = "Invalid manifest"

    def __init__(self, path: Path, reason: str) -> None:
        # FAIL-FIRST: validate required parameters
        if path is None:
            raise TypeError("path must not be None")
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.path = path
        self.reason = reason
        super().__init__(f"{self._prefix} {path}: {reason}")


class ManifestParseError(ManifestError):
    """Manifest content is not a valid JSON object."""

    _prefix = "Failed to parse manifest"


class ManifestReadError(ManifestError):
    """Manifest file could not be read."""

    _prefix = "Failed to read manifest"
