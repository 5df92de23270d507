"""Build configuration for SSR externalization.

Immutable value objects. The decision cache is the only mutable part
and is owned by (and released with) the BuildConfig instance.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import TypeAlias

from ssrexternal.domain.exceptions.configuration import ConfigurationError
from ssrexternal.domain.model.decision import DecisionCache

Pattern: TypeAlias = str | re.Pattern[str]

DEFAULT_LOGGER_NAME = "ssrexternal"
DEFAULT_TOOL_PACKAGE = "vite"


class SsrTarget(Enum):
    """Runtime the server bundle is built for."""

    NODE = "node"
    WEBWORKER = "webworker"

    @property
    def is_web_like(self) -> bool:
        """Web-like targets resolve with browser conditions."""
        return self is SsrTarget.WEBWORKER


class NoExternalKind(Enum):
    """Tag of the ssr.noExternal variant."""

    ALL = auto()  # noExternal: true
    NONE = auto()  # not set (or false)
    PATTERNS = auto()  # list of names/globs/regexes


@dataclass(frozen=True, slots=True)
class NoExternal:
    """ssr.noExternal as a tagged variant.

    Attributes:
        kind: Which variant this is
        patterns: Patterns for PATTERNS kind, empty otherwise
    """

    kind: NoExternalKind = NoExternalKind.NONE
    patterns: tuple[Pattern, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.kind is NoExternalKind.PATTERNS and not self.patterns:
            raise ValueError("PATTERNS noExternal requires at least one pattern")
        if self.kind is not NoExternalKind.PATTERNS and self.patterns:
            raise ValueError(f"{self.kind.name} noExternal must not carry patterns")
        for pattern in self.patterns:
            if not isinstance(pattern, (str, re.Pattern)):
                raise TypeError(f"noExternal pattern must be str or re.Pattern, got {type(pattern)}")

    @classmethod
    def all(cls) -> NoExternal:
        """Bundle every dependency."""
        return cls(NoExternalKind.ALL)

    @classmethod
    def none(cls) -> NoExternal:
        """No noExternal restriction."""
        return cls(NoExternalKind.NONE)

    @classmethod
    def matching(cls, *patterns: Pattern) -> NoExternal:
        """Bundle dependencies whose package name matches any pattern."""
        return cls(NoExternalKind.PATTERNS, tuple(patterns))


@dataclass(frozen=True, slots=True)
class SsrConfig:
    """The ssr section of the build configuration.

    Attributes:
        external: Specifiers or package names forced external
        no_external: Dependencies forced into the bundle
        target: Runtime the server bundle targets
    """

    external: frozenset[str] = frozenset()
    no_external: NoExternal = field(default_factory=NoExternal.none)
    target: SsrTarget = SsrTarget.NODE

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.external, frozenset):
            raise TypeError(f"external must be frozenset, got {type(self.external)}")
        if any(not entry for entry in self.external):
            raise ValueError("external must not contain empty names")


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Resolved build configuration.

    Attributes:
        root: Project root directory
        preserve_symlinks: Keep symlinked paths instead of real paths
        ssr: SSR externalization settings
        logger: Receives user-visible warnings
        legacy_externals: Use the legacy dependency-graph walker
        tool_package: Build tool's own package, never externalized by the walker
        decision_cache: Per-instance memo of externalization decisions, fresh on replace()
    """

    root: Path
    preserve_symlinks: bool = False
    ssr: SsrConfig = field(default_factory=SsrConfig)
    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger(DEFAULT_LOGGER_NAME),
        compare=False,
        repr=False,
    )
    legacy_externals: bool = False
    tool_package: str = DEFAULT_TOOL_PACKAGE
    decision_cache: DecisionCache = field(
        default_factory=DecisionCache, init=False, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.root is None:
            raise TypeError("root must not be None")
        if not isinstance(self.root, Path):
            raise TypeError(f"root must be Path, got {type(self.root)}")
        if not self.tool_package:
            raise ValueError("tool_package must not be empty")

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, object],
        *,
        logger: logging.Logger | None = None,
    ) -> BuildConfig:
        """Build config from a Vite-shaped mapping.

        Recognized keys::

            root: str
            resolve: {preserveSymlinks: bool}
            ssr: {external: [str], noExternal: bool | str | regex | [str | regex],
                  target: "node" | "webworker"}
            legacy: {buildSsrCjsExternalHeuristics: bool}

        Raises:
            ConfigurationError: If a field has the wrong shape
        """
        root = data.get("root", ".")
        if not isinstance(root, (str, Path)):
            raise ConfigurationError("root", f"expected path, got {type(root).__name__}")

        resolve = _section(data, "resolve")
        ssr = _section(data, "ssr")
        legacy = _section(data, "legacy")

        kwargs: dict[str, object] = {
            "root": Path(root),
            "preserve_symlinks": _flag(resolve, "resolve.preserveSymlinks", "preserveSymlinks"),
            "ssr": SsrConfig(
                external=_parse_external(ssr.get("external")),
                no_external=_parse_no_external(ssr.get("noExternal")),
                target=_parse_target(ssr.get("target")),
            ),
            "legacy_externals": _flag(
                legacy, "legacy.buildSsrCjsExternalHeuristics", "buildSsrCjsExternalHeuristics"
            ),
        }
        if logger is not None:
            kwargs["logger"] = logger
        return cls(**kwargs)  # type: ignore[arg-type]


def _section(data: Mapping[str, object], name: str) -> Mapping[str, object]:
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(name, f"expected mapping, got {type(value).__name__}")
    return value


def _flag(section: Mapping[str, object], field_name: str, key: str) -> bool:
    value = section.get(key, False)
    if not isinstance(value, bool):
        raise ConfigurationError(field_name, f"expected bool, got {type(value).__name__}")
    return value


def _parse_external(value: object) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
        raise ConfigurationError("ssr.external", "expected list of package names")
    if not all(isinstance(item, str) and item for item in value):
        raise ConfigurationError("ssr.external", "entries must be non-empty strings")
    return frozenset(value)


def _parse_no_external(value: object) -> NoExternal:
    match value:
        case None | False:
            return NoExternal.none()
        case True:
            return NoExternal.all()
        case str() | re.Pattern():
            return NoExternal.matching(value)
        case list() | tuple():
            if not value:
                return NoExternal.none()
            for item in value:
                if not isinstance(item, (str, re.Pattern)):
                    raise ConfigurationError(
                        "ssr.noExternal",
                        f"entries must be str or regex, got {type(item).__name__}",
                    )
            return NoExternal.matching(*value)
        case _:
            raise ConfigurationError(
                "ssr.noExternal", f"expected bool, pattern or list, got {type(value).__name__}"
            )


def _parse_target(value: object) -> SsrTarget:
    if value is None:
        return SsrTarget.NODE
    try:
        return SsrTarget(value)
    except ValueError:
        raise ConfigurationError("ssr.target", f"expected 'node' or 'webworker', got {value!r}") from None
