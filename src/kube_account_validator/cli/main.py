"""Main CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from kube_account_validator import __version__
from kube_account_validator.cli.commands import validate
from kube_account_validator.logging.config import configure_logging

app = typer.Typer(
    name="kav",
    help="Validate Kubernetes account credentials against their clusters.",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"kav version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Write logs as JSON lines.",
    ),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        help="Also write JSON logs to this rotating file.",
    ),
) -> None:
    """Kubernetes account validator."""
    configure_logging(verbose=verbose, debug=debug, json_output=json_logs, log_file=log_file)


app.command()(validate.validate)


if __name__ == "__main__":
    app()
