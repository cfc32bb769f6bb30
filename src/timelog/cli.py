"""Command-line interface for the time log."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer

from .config import ReportWindow
from .errors import TimelogError
from .models import TIME_FMT, Log
from .parser import check_order, load
from .paths import get_log_path

app = typer.Typer(help="Plain-text time log with work/slack reports.")

FILE_OPTION_HELP = "Location of the time log file."


@app.callback(no_args_is_help=True)
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _load_or_exit(log_path: Optional[Path]) -> Log:
    try:
        return load(log_path or get_log_path())
    except TimelogError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _window_or_exit(days: Optional[int], weeks: Optional[int]) -> ReportWindow:
    try:
        return ReportWindow.from_options(days=days, weeks=weeks)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def report(
    days: Optional[int] = typer.Option(
        None, "--days", "-d", min=1, help="Report on the last N day blocks."
    ),
    weeks: Optional[int] = typer.Option(
        None, "--weeks", "-w", min=1, help="Report on the last N calendar weeks."
    ),
    log_path: Optional[Path] = typer.Option(
        None, "--file", "-f", path_type=Path, help=FILE_OPTION_HELP
    ),
) -> None:
    """Print work and slack totals for the latest days or weeks."""
    from .reporting import render_report

    window = _window_or_exit(days, weeks)
    log = _load_or_exit(log_path)
    typer.echo(render_report(log, window), nl=False)


@app.command()
def add(
    description: List[str] = typer.Argument(..., help="What you just finished doing."),
    at: Optional[str] = typer.Option(
        None, "--at", help="Time the activity ended (YYYY-MM-DD HH:MM). Defaults to now."
    ),
    log_path: Optional[Path] = typer.Option(
        None, "--file", "-f", path_type=Path, help=FILE_OPTION_HELP
    ),
) -> None:
    """Append an entry, then print the refreshed daily report."""
    from .reporting import render_report
    from .store import append

    timestamp: Optional[datetime] = None
    if at:
        try:
            timestamp = datetime.strptime(at, TIME_FMT)
        except ValueError as exc:
            raise typer.BadParameter(f"expected YYYY-MM-DD HH:MM, got {at!r}") from exc

    log = _load_or_exit(log_path)
    try:
        append(log, " ".join(description), at=timestamp)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except TimelogError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(render_report(log, ReportWindow()), nl=False)


@app.command()
def since(
    log_path: Optional[Path] = typer.Option(
        None, "--file", "-f", path_type=Path, help=FILE_OPTION_HELP
    ),
) -> None:
    """Print how long ago the last entry was made."""
    from .aggregation import time_since_last
    from .reporting import ABSENT, format_duration

    elapsed = time_since_last(_load_or_exit(log_path))
    typer.echo(format_duration(elapsed) if elapsed is not None else ABSENT)


@app.command()
def check(
    log_path: Optional[Path] = typer.Option(
        None, "--file", "-f", path_type=Path, help=FILE_OPTION_HELP
    ),
) -> None:
    """Validate the log file and list entries that go back in time."""
    log = _load_or_exit(log_path)
    issues = check_order(log)
    for issue in issues:
        typer.echo(f"Warning: {issue}")
    if not issues:
        typer.echo("No issues found.")


@app.command()
def entries(
    date: Optional[str] = typer.Option(
        None,
        "--date",
        help="Date (YYYY-MM-DD) to list. Defaults to today.",
    ),
    log_path: Optional[Path] = typer.Option(
        None, "--file", "-f", path_type=Path, help=FILE_OPTION_HELP
    ),
) -> None:
    """Print the raw entries recorded on one day."""
    try:
        target = datetime.strptime(date, "%Y-%m-%d") if date else datetime.now()
    except ValueError as exc:
        raise typer.BadParameter(f"expected YYYY-MM-DD, got {date!r}") from exc
    found = _load_or_exit(log_path).entries_on(target.date())
    if not found:
        typer.echo("No entries recorded for the selected day.")
        return
    for entry in found:
        typer.echo(str(entry))


@app.command()
def suggest(
    prefix: str = typer.Argument(..., help="Beginning of a description."),
    log_path: Optional[Path] = typer.Option(
        None, "--file", "-f", path_type=Path, help=FILE_OPTION_HELP
    ),
) -> None:
    """List known descriptions that complete PREFIX."""
    from .completion import suggest as suggest_descriptions

    for candidate in suggest_descriptions(_load_or_exit(log_path), prefix):
        typer.echo(candidate)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the dashboard."),
    port: int = typer.Option(
        8765, "--port", min=1, max=65535, help="TCP port for the dashboard."
    ),
    log_path: Optional[Path] = typer.Option(
        None, "--file", "-f", path_type=Path, help=FILE_OPTION_HELP
    ),
    open_browser: bool = typer.Option(
        False,
        "--open-browser/--no-open-browser",
        help="Open the interactive API docs in your default browser.",
    ),
) -> None:
    """Serve the report API locally."""
    from .server_runner import run_dashboard

    run_dashboard(
        host=host,
        port=port,
        log_path=log_path or get_log_path(),
        open_browser=open_browser,
    )
