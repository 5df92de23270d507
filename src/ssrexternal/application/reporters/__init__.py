"""Reporters for externalization outcomes.

Available reporters:
- ConsoleReporter: rich formatted text (returns str)
- JSONReporter: machine-readable JSON output
"""

from ssrexternal.application.reporters._base import BaseReporter
from ssrexternal.application.reporters.console import ConsoleConfig, ConsoleReporter
from ssrexternal.application.reporters.json_reporter import JSONReporter

__all__ = [
    "BaseReporter",
    "ConsoleConfig",
    "ConsoleReporter",
    "JSONReporter",
]
