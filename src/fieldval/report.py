"""Rendering of validation results for the terminal."""

import json
from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import ReportFormat
from .validator import ValidationError


@dataclass
class RecordReport:
    """Validation outcome for one input record."""
    label: str
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "record": self.label,
            "valid": self.passed,
            "errors": [error.to_dict() for error in self.errors],
        }


def exit_code(reports: list[RecordReport]) -> int:
    """Exit code for CI: 0 = every record passed, 1 = any failure."""
    return 0 if all(report.passed for report in reports) else 1


def render(reports: list[RecordReport], format: ReportFormat | str, console: Console) -> None:
    """Print ``reports`` to ``console`` in the requested format."""
    format = ReportFormat(format)
    if format == ReportFormat.JSON:
        payload = {
            "valid": exit_code(reports) == 0,
            "records": [report.to_dict() for report in reports],
        }
        console.print_json(json.dumps(payload))
    elif format == ReportFormat.MARKDOWN:
        _render_markdown(reports, console)
    else:
        _render_table(reports, console)


def _render_markdown(reports: list[RecordReport], console: Console) -> None:
    console.print("# Validation Report", markup=False, soft_wrap=True)
    for report in reports:
        status = "PASS" if report.passed else "FAIL"
        console.print(f"## {report.label}: {status}", markup=False, soft_wrap=True)
        for error in report.errors:
            console.print(f"- **{error.field}**", markup=False, soft_wrap=True)
            for message in error.errors:
                console.print(f"  - {message}", markup=False, soft_wrap=True)
        console.print()


def _render_table(reports: list[RecordReport], console: Console) -> None:
    for report in reports:
        if report.passed:
            console.print(f"[green]OK[/green] {escape(report.label)}: all fields passed")
            continue

        console.print(f"[red]FAIL[/red] {escape(report.label)}: {len(report.errors)} invalid field(s)")
        table = Table()
        table.add_column("Field", style="cyan")
        table.add_column("Errors", style="white")

        for error in report.errors:
            table.add_row(escape(error.field), escape("\n".join(error.errors)))

        console.print(table)
