#!/usr/bin/env python3
"""
Cadence CLI - Fluent HTTP API assertions

Usage:
    cadence validate <config.yaml>
    cadence compare <expected.json> <actual.json> [OPTIONS]
    cadence --version
"""

from pathlib import Path
from typing import Any

import typer
import yaml
from rich.console import Console
from rich.table import Table

from . import __version__
from .assertions import CollectingReporter, DefaultFormatter
from .config import Config, load_config
from .expect import Expect

app = typer.Typer(
    name="cadence",
    help="Cadence - Fluent assertions for HTTP API tests",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"Cadence v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
):
    """
    Cadence - Fluent assertions for HTTP API tests

    Validate session configs and compare JSON documents canonically.
    """
    pass


def load_document(path: Path) -> Any:
    """Load a JSON or YAML document. JSON is read by the YAML parser."""
    with open(path) as f:
        return yaml.safe_load(f)


@app.command()
def validate(
    config_file: Path = typer.Argument(
        ...,
        help="Path to the config YAML file",
        exists=True,
        readable=True,
    ),
):
    """
    Validate a config YAML file.

    Check the schema and show the resolved settings.
    """
    console.print(f"\n📄 Validating: {config_file}")

    config, validation = load_config(str(config_file))

    if not validation.is_valid:
        console.print(f"\n[red]❌ Validation failed:[/red]")
        console.print(str(validation))
        raise typer.Exit(code=1)

    console.print(f"\n[green]✅ Valid config:[/green] {config.test_name or '<unnamed>'}")

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("base_url", config.base_url or "-")
    table.add_row("timeout_ms", str(config.timeout_ms))
    table.add_row("auth", config.auth.type.value if config.auth else "-")
    table.add_row("headers", ", ".join(sorted(config.headers)) or "-")
    table.add_row("env", ", ".join(config.environment.keys()) or "-")

    console.print()
    console.print(table)
    raise typer.Exit(code=0)


@app.command()
def compare(
    expected_file: Path = typer.Argument(
        ...,
        help="Document with the expected value (JSON or YAML)",
        exists=True,
        readable=True,
    ),
    actual_file: Path = typer.Argument(
        ...,
        help="Document with the actual value (JSON or YAML)",
        exists=True,
        readable=True,
    ),
    no_diff: bool = typer.Option(
        False, "--no-diff",
        help="Do not print a diff on mismatch"
    ),
):
    """
    Compare two documents using canonical equality.

    Key order, integer vs float and empty vs null containers do not
    count as differences. Exits with code 1 on mismatch.
    """
    try:
        expected = load_document(expected_file)
        actual = load_document(actual_file)
    except yaml.YAMLError as e:
        console.print(f"[red]❌ Could not parse document:[/red] {e}")
        raise typer.Exit(code=2)

    reporter = CollectingReporter()
    e = Expect(Config(
        test_name=f"{expected_file.name} == {actual_file.name}",
        reporter=reporter,
        formatter=DefaultFormatter(disable_diffs=no_diff),
    ))
    e.value(actual).is_equal(expected)

    if reporter.failed:
        for message in reporter.messages:
            console.print(message, markup=False, highlight=False)
        console.print("\n[red]❌ Documents differ[/red]")
        raise typer.Exit(code=1)

    console.print("[green]✅ Documents are equal[/green]")


@app.command()
def info():
    """
    Show information about Cadence.
    """
    console.print(f"""
[bold]Cadence[/bold] v{__version__}

Fluent assertions for HTTP API tests

[bold]Features:[/bold]
  • Chainable typed nodes for objects, arrays, strings, numbers and booleans
  • Canonical equality across numeric types, records and empty containers
  • JSONPath navigation
  • Failure propagation: one root cause, one report
  • Authentication support (Bearer, API Key, Basic)

[bold]Quick Start:[/bold]
  cadence validate cadence.yaml
  cadence compare expected.json actual.json
""")


if __name__ == "__main__":
    app()
