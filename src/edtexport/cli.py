"""Click CLI for edtexport — serve, fetch and sanitize timetable exports."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from edtexport.config.hierarchy import load_export_config
from edtexport.config.schema import ExportConfig

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


def _load_config(**overrides: object) -> ExportConfig:
    try:
        return load_export_config(**overrides)
    except Exception as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@click.group()
@click.version_option(package_name="edtexport")
def cli() -> None:
    """edtexport — sanitized, cached timetable export."""


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address.")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def serve(host: str, port: int, verbose: int) -> None:
    """Run the web app."""
    _setup_logging(verbose)
    import uvicorn

    from edtexport.web.app import create_app

    app = create_app(_load_config())
    uvicorn.run(app, host=host, port=port, log_level="debug" if verbose >= 2 else "info")


@cli.command()
@click.option("-o", "--output", type=click.Path(), help="Output file path.")
@click.option("--force", is_flag=True, default=False, help="Ignore the cache and re-fetch.")
@click.option("--token", type=str, default=None, help="Override the upstream access token.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def fetch(output: str | None, force: bool, token: str | None, verbose: int) -> None:
    """Fetch, sanitize and cache the export, then print it."""
    _setup_logging(verbose)
    from edtexport.core import TimetableExport

    export = TimetableExport(_load_config(token=token))
    try:
        text = export.get_sanitized_xml(force_refresh=force)
    except Exception as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    finally:
        export.close()

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]Written to {output}[/green]")
    else:
        click.echo(text, nl=False)


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(), help="Output file path.")
def sanitize(input_path: str, output: str | None) -> None:
    """Sanitize a local export file without touching the cache."""
    from edtexport.sanitize.sanitizer import sanitize_xml

    try:
        text = sanitize_xml(Path(input_path).read_text(encoding="utf-8"))
    except Exception as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]Written to {output}[/green]")
    else:
        click.echo(text, nl=False)


@cli.group()
def cache() -> None:
    """Cache management commands."""


@cache.command("info")
def cache_info() -> None:
    """Show the cache entry's location and freshness."""
    from edtexport.cache.store import FileCacheStore

    store = FileCacheStore(_load_config())
    try:
        entry = store.get()
    except Exception as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    table = Table(title="Cache Entry", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Path", str(store.path))
    table.add_row("Exists", "yes" if entry else "no")
    table.add_row("Expiration (s)", f"{store.expiration_seconds:.0f}")
    if entry:
        table.add_row("Age (s)", f"{entry.age_seconds:.0f}")
        table.add_row("Fresh", "yes" if store.is_fresh(entry) else "[yellow]stale[/yellow]")
        table.add_row("Size (bytes)", f"{entry.size_bytes:,}")

    console.print(table)


@cache.command("clear")
@click.confirmation_option(prompt="Are you sure you want to clear the cache?")
def cache_clear() -> None:
    """Delete the cached export."""
    from edtexport.cache.store import FileCacheStore

    store = FileCacheStore(_load_config())
    try:
        cleared = store.clear()
    except Exception as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if cleared:
        console.print("[green]Cache cleared.[/green]")
    else:
        console.print("[yellow]Cache was already empty.[/yellow]")


def main() -> None:
    """Entry point for the CLI."""
    cli()
