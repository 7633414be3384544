# src/polydict/cli.py
"""
polydict Command Line Interface (CLI).

This module implements the operator-facing commands using `typer` and `rich`.
Every command opens its own store handle with `open_store` and releases it on
exit.

Commands
--------
- `migrate`:        per-language JSON files -> store (grouped by wordId).
- `seed`:           consolidated seed document -> store.
- `clean`:          delete every row (dry run unless `--yes`).
- `create-indexes`: ensure the search indexes exist.
- `serve`:          run the HTTP API with uvicorn.

Usage
-----
    $ polydict migrate --source-dir mock-data/db -l en -l de -l it -l es
    $ polydict seed mock-data/seedDataSets.json --report artifacts/runs/seed.json
    $ polydict clean --yes
"""

from __future__ import annotations

import traceback
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError

from polydict.core.errors import DictionaryError
from polydict.core.settings import load_settings
from polydict.pipelines import LoadReport, clean_store, run_migration, run_seed
from polydict.store.indexes import ensure_indexes
from polydict.store.session import create_store_engine, open_store

# Ensure env vars (like DATABASE_URL) are loaded before any logic runs
load_dotenv()

app = typer.Typer(
    help="polydict: load and serve a multilingual dictionary.",
    rich_markup_mode="markdown",
)
console = Console()

DatabaseOption = Annotated[
    str | None,
    typer.Option("--database-url", "-d", help="SQLAlchemy URL; defaults to DATABASE_URL."),
]
ReportOption = Annotated[
    Path | None,
    typer.Option("--report", "-r", help="Write the run summary as JSON to this path."),
]
SaveReportOption = Annotated[
    bool,
    typer.Option("--save-report", help="Write a timestamped summary into POLYDICT_REPORT_DIR."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show full error tracebacks for debugging."),
]


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _database_url(override: str | None) -> str:
    return override or load_settings().database_url


def _render_report(report: LoadReport) -> None:
    """Print the run totals as a small table."""
    table = Table(title=f"{report.kind} summary", show_header=True, header_style="bold")
    table.add_column("Metric")
    table.add_column("Count", justify="right")
    table.add_row("Groups", str(report.groups))
    table.add_row("Processed", f"[green]{report.processed}[/green]")
    table.add_row("Skipped (already present)", f"[yellow]{report.skipped}[/yellow]")
    table.add_row("Dropped (invalid records)", f"[red]{report.dropped}[/red]")
    table.add_row("Base-language collisions", str(report.base_collisions))
    console.print(table)


def _save_report(report: LoadReport, path: Path | None, save: bool) -> None:
    """Write the report to `path`; a directory (or `--save-report`) gets a timestamped file."""
    if path is None and save:
        path = load_settings().report_dir
    if path is None:
        return
    if path.is_dir() or not path.suffix:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = path / f"{stamp}_{report.kind}.json"
    saved = report.write(path)
    console.print(f"[dim]Report saved to: {saved}[/dim]")


def _fail(label: str, exc: Exception, verbose: bool) -> typer.Exit:
    console.print(f"\n[bold red]❌ {label}:[/bold red] {exc}")
    if verbose:
        traceback.print_exc()
    return typer.Exit(code=1)


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def migrate(
    source_dir: Annotated[
        Path | None,
        typer.Option(
            "--source-dir",
            "-s",
            file_okay=False,
            dir_okay=True,
            help="Directory with one <lang>.json per language.",
        ),
    ] = None,
    languages: Annotated[
        list[str] | None,
        typer.Option("--language", "-l", help="Language file to read (repeatable, ordered)."),
    ] = None,
    base_language: Annotated[
        str | None,
        typer.Option("--base-language", "-b", help="Preferred base language code."),
    ] = None,
    database_url: DatabaseOption = None,
    report_path: ReportOption = None,
    save_report: SaveReportOption = False,
    verbose: VerboseOption = False,
) -> None:
    """
    Merge the per-language source files into the store, one word group at a time.

    Groups whose `wordId` already exists are skipped, so re-running is safe.
    """
    settings = load_settings()
    source = source_dir or settings.source_dir
    langs = languages or settings.source_languages
    base = base_language or settings.base_language

    console.print(
        Panel.fit(
            f"[bold cyan]polydict migrate[/bold cyan]\n"
            f"Source: [u]{source}[/u]  Languages: {', '.join(langs)}  Base: {base}",
            border_style="cyan",
        )
    )

    try:
        with open_store(_database_url(database_url)) as session:
            with console.status("[cyan]Migrating word groups..."):
                report = run_migration(session, source, langs, base)
    except DictionaryError as e:
        raise _fail("Migration failed", e, verbose) from e

    console.print("[bold green]✅ Migration completed![/bold green]")
    _render_report(report)
    _save_report(report, report_path, save_report)


@app.command()  # type: ignore[misc]
def seed(
    seed_file: Annotated[
        Path | None,
        typer.Argument(help="Seed document; defaults to SEED_FILE."),
    ] = None,
    database_url: DatabaseOption = None,
    report_path: ReportOption = None,
    save_report: SaveReportOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Load the consolidated seed document (no grouping step)."""
    path = seed_file or load_settings().seed_file
    console.print(
        Panel.fit(
            f"[bold magenta]polydict seed[/bold magenta]\nLoading: [u]{path}[/u]",
            border_style="magenta",
        )
    )

    try:
        with open_store(_database_url(database_url)) as session:
            with console.status("[magenta]Seeding words..."):
                report = run_seed(session, path)
    except DictionaryError as e:
        raise _fail("Seeding failed", e, verbose) from e

    console.print("[bold green]✨ Seeding completed![/bold green]")
    _render_report(report)
    _save_report(report, report_path, save_report)


@app.command()  # type: ignore[misc]
def clean(
    yes: Annotated[
        bool,
        typer.Option("--yes", help="Actually delete. Without it this is a dry run."),
    ] = False,
    database_url: DatabaseOption = None,
    verbose: VerboseOption = False,
) -> None:
    """
    Delete every dictionary row. **This is permanent**: back up the store first.

    Without `--yes` the store is not even opened.
    """
    if not yes:
        console.print(
            "Dry run: no changes made. "
            "To actually delete data, re-run with [bold]--yes[/bold]."
        )
        return

    try:
        with open_store(_database_url(database_url)) as session:
            result = clean_store(session, confirm=True)
    except DictionaryError as e:
        raise _fail("Cleanup failed", e, verbose) from e

    table = Table(title="Deleted rows")
    table.add_column("Table")
    table.add_column("Rows", justify="right")
    for name, count in result.counts.items():
        table.add_row(name, str(count))
    console.print(table)


@app.command("create-indexes")  # type: ignore[misc]
def create_indexes(database_url: DatabaseOption = None) -> None:
    """Ensure the language and text search indexes exist."""
    try:
        engine = create_store_engine(_database_url(database_url))
        try:
            names = ensure_indexes(engine)
        finally:
            engine.dispose()
    except SQLAlchemyError as e:
        raise _fail("Index setup error", e, False) from e
    for name in names:
        console.print(f" • {name}")
    console.print("[bold green]✅ Indexes successfully ensured[/bold green]")


@app.command()  # type: ignore[misc]
def serve(
    host: Annotated[str | None, typer.Option(help="Bind address; defaults to HOST.")] = None,
    port: Annotated[int | None, typer.Option(help="Port; defaults to PORT.")] = None,
    reload: Annotated[bool, typer.Option(help="Auto-reload on code changes.")] = False,
) -> None:
    """Run the HTTP API."""
    from polydict.api.server import main as run_server

    run_server(host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
