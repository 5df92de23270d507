"""Base reporter class for output formatting.

Concrete reporters inherit from this.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ssrexternal.domain.model.report import ExternalsReport


class BaseReporter(ABC):
    """Base class for externals reporters.

    ssrexternal provides ConsoleReporter and JSONReporter as defaults.

    Example:
        class MyReporter(BaseReporter):
            def report(self, report: ExternalsReport) -> None:
                print(f"Externals: {len(report.externals)}")
    """

    @abstractmethod
    def report(self, report: ExternalsReport) -> object:
        """Report an externalization outcome.

        Implementation decides output format and destination.

        Args:
            report: Externals list and per-specifier decisions
        """
