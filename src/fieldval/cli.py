"""CLI interface for fieldval using Typer framework."""

import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fieldval import __description__, __version__
from fieldval.config import LogLevel, ReportFormat, load_config
from fieldval.demo import run_demo
from fieldval.exceptions import ConfigurationError, FieldvalError
from fieldval.loader import load_rules, read_document
from fieldval.report import RecordReport, exit_code, render
from fieldval.rules import CATALOG, DEFAULT_MESSAGES

app = typer.Typer(
    name="fieldval",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"fieldval version {__version__}")
        raise typer.Exit()


def _setup_logging(level: LogLevel) -> None:
    logging.basicConfig(
        level=level.to_logging(),
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """fieldval - Declarative field validation for records."""


def _records(data: Any, data_path: Path) -> list[tuple[str, dict]]:
    """Accept a single record or a list of records."""
    if isinstance(data, dict):
        return [(data_path.name, data)]
    if isinstance(data, list) and all(isinstance(item, dict) for item in data):
        return [(f"{data_path.name}[{i}]", item) for i, item in enumerate(data)]
    raise ConfigurationError("Data must be a record or a list of records", source=str(data_path))


@app.command()
def check(
    rules: Annotated[
        Path,
        typer.Argument(help="Rules document (JSON or YAML)")
    ],
    data: Annotated[
        Path,
        typer.Argument(help="Record or list of records to validate (JSON or YAML)")
    ],
    format: Annotated[
        Optional[ReportFormat],
        typer.Option("--format", "-f", help="Output format (default: from config, else table)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .fieldval.json)")
    ] = None,
    parallel: Annotated[
        Optional[bool],
        typer.Option("--parallel/--sequential", help="Validate fields concurrently")
    ] = None,
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option("--log-level", help="Logging level (default: from config)")
    ] = None,
) -> None:
    """Validate records against a rules document."""
    try:
        fieldval_config = load_config(config)
        _setup_logging(log_level or fieldval_config.logging.level)

        settings = fieldval_config.validator
        if parallel is not None:
            settings = settings.model_copy(update={"parallel": parallel})

        validator = load_rules(rules, settings=settings).freeze()
        records = _records(read_document(data), data)
    except FieldvalError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)

    try:
        reports = [RecordReport(label, validator.validate(record)) for label, record in records]
    except FieldvalError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)

    render(reports, format or fieldval_config.output.format, console)
    raise typer.Exit(exit_code(reports))


@app.command("rules")
def list_rules() -> None:
    """List the built-in rules."""
    table = Table(title="Built-in rules")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Parameters", style="white")
    table.add_column("Passes when", style="white")
    table.add_column("Default message", style="dim")

    for kind, (params, description) in CATALOG.items():
        table.add_row(kind, ", ".join(params) or "-", description, DEFAULT_MESSAGES[kind])

    console.print(table)


@app.command()
def demo(
    format: Annotated[
        ReportFormat,
        typer.Option("--format", "-f", help="Output format")
    ] = ReportFormat.TABLE,
) -> None:
    """Run the bundled user, flower and garden examples."""
    reports = run_demo()
    render(reports, format, console)
    raise typer.Exit(exit_code(reports))


if __name__ == "__main__":
    app()
