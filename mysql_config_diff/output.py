"""Diff report renderers.

Turns a ``DiffReport`` into JSON, tab-indented JSON or aligned plain-text
columns. Keys are always emitted in sorted order so output is stable between
runs.
"""

import json
from abc import ABC, abstractmethod
from enum import Enum

from .exceptions import OutputFormatError
from .models import DiffReport


class OutputFormat(str, Enum):
    """Supported report formats."""

    JSON = "json"
    PRETTY_JSON = "prettyJson"
    PLAIN = "plain"


class ReportFormatter(ABC):
    """Renders a diff report as text."""

    @abstractmethod
    def format(self, report: DiffReport) -> str:
        """Render the report."""


class JSONFormatter(ReportFormatter):
    """JSON object of name -> [first value, second value]."""

    def __init__(self, pretty: bool = False):
        self.pretty = pretty

    def format(self, report: DiffReport) -> str:
        return json.dumps(
            report,
            indent="\t" if self.pretty else None,
            sort_keys=True,
            default=str,
        )


class PlainFormatter(ReportFormatter):
    """One aligned line per differing variable."""

    line_format = "{name:>35}: {first:>40} : {second:>40}\n"

    def format(self, report: DiffReport) -> str:
        lines = []
        for name in sorted(report):
            first, second = report[name][0], report[name][-1]
            lines.append(
                self.line_format.format(name=name, first=str(first), second=str(second))
            )
        return "".join(lines)


def get_formatter(output_format: str | OutputFormat) -> ReportFormatter:
    """Get the formatter for an output format.

    Raises:
        OutputFormatError: If the format doesn't exist
    """
    try:
        fmt = OutputFormat(output_format)
    except ValueError:
        valid = ", ".join(f.value for f in OutputFormat)
        raise OutputFormatError(
            f"The specified output format '{output_format}' doesn't exist, "
            f"expected one of: {valid}"
        ) from None

    if fmt is OutputFormat.PLAIN:
        return PlainFormatter()
    return JSONFormatter(pretty=fmt is OutputFormat.PRETTY_JSON)


def format_report(report: DiffReport, output_format: str | OutputFormat) -> str:
    """Render a report in the given format."""
    return get_formatter(output_format).format(report)
