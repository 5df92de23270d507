"""Externals report value object."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType


class ExternalsMode(Enum):
    """How externals were decided."""

    DEFAULT = "default"  # memoized per-specifier decision
    LEGACY = "legacy"  # dependency-graph walker


@dataclass(frozen=True, slots=True)
class ExternalsReport:
    """Outcome of an externalization run.

    Attributes:
        root: Project root
        mode: Decision mode used
        externals: Aggregate externals list (legacy mode only, empty otherwise)
        decisions: specifier -> is external, for queried specifiers
    """

    root: Path
    mode: ExternalsMode
    externals: tuple[str, ...] = ()
    decisions: Mapping[str, bool] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.root is None:
            raise TypeError("root must not be None")
        if self.mode is ExternalsMode.DEFAULT and self.externals:
            raise ValueError("externals list is only produced in legacy mode")

    @property
    def external_count(self) -> int:
        """Number of queried specifiers decided external."""
        return sum(1 for external in self.decisions.values() if external)

    @property
    def bundled_count(self) -> int:
        """Number of queried specifiers decided bundled."""
        return len(self.decisions) - self.external_count
