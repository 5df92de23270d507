"""Console reporter: ExternalsReport -> rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from ssrexternal.application.reporters._base import BaseReporter

if TYPE_CHECKING:
    from ssrexternal.domain.model.report import ExternalsReport


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        show_bundled: Include bundled specifiers in the decisions table.
        width: Console width in characters.
    """

    show_bundled: bool = True
    width: int = 120

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.width < 20:
            raise ValueError(f"width must be >= 20, got {self.width}")


class ConsoleReporter(BaseReporter):
    """Console reporter: outputs rich formatted text.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()

    def report(self, report: ExternalsReport) -> str:
        """Format report as rich formatted string.

        Args:
            report: Externals report to format.

        Returns:
            Formatted string with colors and tables.
        """
        output = StringIO()
        console = Console(
            file=output, force_terminal=True, width=self._config.width, highlight=False
        )

        self._render_header(console, report)
        if report.externals:
            self._render_externals(console, report)
        if report.decisions:
            self._render_decisions(console, report)

        return output.getvalue()

    def _render_header(self, console: Console, report: ExternalsReport) -> None:
        console.print()
        console.rule("[bold]SSR EXTERNALS[/bold]")
        console.print()
        console.print(f"[bold]Root:[/bold] {report.root}")
        console.print(f"[bold]Mode:[/bold] {report.mode.value}")
        console.print(
            f"[bold]Decisions:[/bold] {len(report.decisions)} "
            f"([green]{report.external_count} external[/green], "
            f"[yellow]{report.bundled_count} bundled[/yellow])"
        )

    def _render_externals(self, console: Console, report: ExternalsReport) -> None:
        console.print()
        console.print(f"[bold]Externals ({len(report.externals)}):[/bold]")
        for name in report.externals:
            console.print(f"  [green]{name}[/green]")

    def _render_decisions(self, console: Console, report: ExternalsReport) -> None:
        table = Table(title="Decisions", show_header=True, header_style="bold")
        table.add_column("Specifier")
        table.add_column("Decision")

        for specifier, external in report.decisions.items():
            if not external and not self._config.show_bundled:
                continue
            label = "[green]external[/green]" if external else "[yellow]bundled[/yellow]"
            table.add_row(specifier, label)

        console.print()
        console.print(table)
