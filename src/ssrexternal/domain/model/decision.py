"""Externalization decision value objects."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TypeAlias
from dataclasses import dataclass, field
from enum import Enum, auto

Decider: TypeAlias = Callable[[str], bool]


class Decision(Enum):
    """Tri-state outcome of the configured policy.

    Only EXTERNAL and BUNDLED are final.
    """

    EXTERNAL = auto()  # load with the host module loader
    BUNDLED = auto()  # inline into the build output
    UNRESOLVED = auto()  # config has no opinion

    @property
    def final(self) -> bool:
        """Whether this decision is definite."""
        return self is not Decision.UNRESOLVED

    def to_bool(self) -> bool:
        """Convert a final decision to "is external".

        Raises:
            ValueError: If decision is UNRESOLVED
        """
        if not self.final:
            raise ValueError("UNRESOLVED decision has no boolean value")
        return self is Decision.EXTERNAL

    def or_else(self, fallback: Callable[[], bool]) -> bool:
        """Final value, or fallback() when UNRESOLVED.

        fallback is only called when needed.
        """
        if self.final:
            return self.to_bool()
        return fallback()

    @classmethod
    def from_bool(cls, external: bool) -> Decision:
        """EXTERNAL for True, BUNDLED for False."""
        return cls.EXTERNAL if external else cls.BUNDLED


@dataclass(slots=True)
class DecisionCache:
    """Append-only memo of decisions for one configuration.

    Never invalidated: lifetime equals the owning configuration.
    Recomputing a decision yields the same value, so the lock only
    guards insert-if-absent, not the computation.

    Attributes:
        _entries: specifier -> is external
        _decider: Decision function built on first use
        _lock: Guards _entries and _decider
    """

    _entries: dict[str, bool] = field(default_factory=dict)
    _decider: Decider | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def get(self, specifier: str) -> bool | None:
        """Cached decision, or None if not computed yet."""
        return self._entries.get(specifier)

    def store(self, specifier: str, external: bool) -> bool:
        """Insert decision if absent.

        Returns:
            The decision stored for specifier (first writer wins)
        """
        with self._lock:
            return self._entries.setdefault(specifier, external)

    def decider(self, factory: Callable[[], Decider]) -> Decider:
        """Decision function for this configuration, built once."""
        with self._lock:
            if self._decider is None:
                self._decider = factory()
            return self._decider

    def __contains__(self, specifier: object) -> bool:
        return specifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)
