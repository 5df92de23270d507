"""JSON reporter for machine-readable output.

Stdlib-only reporter for JSON output.
"""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, TextIO

from ssrexternal.application.reporters._base import BaseReporter

if TYPE_CHECKING:
    from ssrexternal.domain.model.report import ExternalsReport


class JSONReporter(BaseReporter):
    """JSON reporter for machine-readable output.

    Outputs externals for build tooling or CI inspection.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        *,
        indent: int | None = 2,
    ) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
            indent: JSON indentation (default: 2, None for compact)
        """
        self._output = output if output is not None else sys.stdout
        self._indent = indent

    def report(self, report: ExternalsReport) -> None:
        """Write report as JSON.

        Args:
            report: Externals report
        """
        json.dump(self._report_to_dict(report), self._output, indent=self._indent)
        self._output.write("\n")

    def _report_to_dict(self, report: ExternalsReport) -> dict[str, object]:
        """Convert report to JSON-serializable dict."""
        return {
            "root": str(report.root),
            "mode": report.mode.value,
            "externals": list(report.externals),
            "summary": {
                "queried": len(report.decisions),
                "external": report.external_count,
                "bundled": report.bundled_count,
            },
            "decisions": [
                {"id": specifier, "external": external}
                for specifier, external in report.decisions.items()
            ],
        }
