"""Command-line interface for Synaptic Store."""

import json
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

import typer
from rich.console import Console
from rich.table import Table

from .config.logging import setup_logging
from .config.settings import Settings
from .core.exceptions import StoreError
from .engine import KindStore, StorageEngine
from .models.envelope import BackendKind
from .utils.date_utils import format_duration, parse_ttl, time_until_expiry

app = typer.Typer(
    name="synaptic-store",
    help="Synaptic Store - key-value storage with expiration, namespaces and undo",
    add_completion=False,
)
console = Console()

KIND_OPTION = typer.Option("local", "--kind", "-k", help="Storage kind: local or session")


@app.callback()
def configure(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Configure logging before running a command."""
    settings = Settings()
    if debug:
        settings.DEBUG = True
        settings.LOG_LEVEL = "DEBUG"
    setup_logging(settings)


@contextmanager
def open_store(kind: str) -> Iterator[KindStore]:
    """Open an engine and yield the store for ``kind``, exiting on errors."""
    try:
        with StorageEngine(Settings()) as engine:
            yield engine.store(kind)
    except StoreError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


def parse_value(value: str) -> Any:
    """Parse a command-line value as JSON, falling back to the plain string."""
    try:
        return json.loads(value)
    except ValueError:
        return value


@app.command("get")
def get_item(key: str = typer.Argument(..., help="Key to read"), kind: str = KIND_OPTION) -> None:
    """Print the value stored under KEY."""
    with open_store(kind) as store:
        value = store.get(key)

    if value is None:
        console.print(f"[yellow]No value for '{key}'[/yellow]")
        raise typer.Exit(code=1)
    console.print_json(data=value)


@app.command("set")
def set_item(
    key: str = typer.Argument(..., help="Key to write"),
    value: str = typer.Argument(..., help="Value, parsed as JSON when possible"),
    ttl: Optional[str] = typer.Option(
        None, "--ttl", "-t", help="Time to live: milliseconds or 30s, 5m, 1h, 2d, 1w"
    ),
    kind: str = KIND_OPTION,
) -> None:
    """Store VALUE under KEY."""
    try:
        ttl_ms = parse_ttl(ttl) if ttl is not None else None
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

    with open_store(kind) as store:
        envelope = store.set(key, parse_value(value), ttl_ms)

    message = f"[green]Stored '{key}'[/green]"
    if envelope.expires_at is not None:
        message += f" (expires at {envelope.expires_at})"
    console.print(message)


@app.command("remove")
def remove_item(key: str = typer.Argument(..., help="Key to remove"), kind: str = KIND_OPTION) -> None:
    """Remove KEY."""
    with open_store(kind) as store:
        removed = store.remove(key)

    if removed:
        console.print(f"[green]Removed '{key}'[/green]")
    else:
        console.print(f"[yellow]No value for '{key}'[/yellow]")


@app.command("ttl")
def show_ttl(key: str = typer.Argument(..., help="Key to inspect"), kind: str = KIND_OPTION) -> None:
    """Show when KEY was written and how long it has left."""
    with open_store(kind) as store:
        envelope = store.get_envelope(key)

    if envelope is None:
        console.print(f"[yellow]No value for '{key}'[/yellow]")
        raise typer.Exit(code=1)

    console.print(f"Written at: {envelope.created_at}")
    remaining = time_until_expiry(envelope.expires_at)
    if remaining is None:
        console.print("Expires: never")
    else:
        console.print(f"Expires at: {envelope.expires_at} (in {format_duration(remaining)})")


@app.command("keys")
def list_keys(kind: str = KIND_OPTION) -> None:
    """List stored keys in enumeration order."""
    with open_store(kind) as store:
        keys = store.keys()

    for key in keys:
        console.print(key, highlight=False, markup=False, emoji=False)


@app.command("clear")
def clear_store(
    kind: str = KIND_OPTION,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Remove every entry."""
    if not yes and not typer.confirm(f"Remove every entry from {kind} storage?"):
        raise typer.Exit(code=1)

    with open_store(kind) as store:
        store.clear()
    console.print(f"[green]Cleared {kind} storage[/green]")


@app.command("clear-expired")
def clear_expired(kind: str = KIND_OPTION) -> None:
    """Remove expired entries."""
    with open_store(kind) as store:
        removed = store.clear_expired()
    console.print(f"[green]Removed {removed} expired entries[/green]")


@app.command("clear-namespace")
def clear_namespace(
    prefix: str = typer.Argument(..., help="Namespace, e.g. 'app:users'"),
    kind: str = KIND_OPTION,
) -> None:
    """Remove every entry under a namespace."""
    with open_store(kind) as store:
        removed = store.clear_namespace(prefix)
    console.print(f"[green]Removed {removed} entries from namespace '{prefix}'[/green]")


@app.command("stats")
def show_stats(kind: str = KIND_OPTION) -> None:
    """Show storage statistics."""
    with open_store(kind) as store:
        stats = store.stats()

    table = Table(title=f"{stats.kind.value} storage")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for name, value in stats.model_dump(mode="json").items():
        table.add_row(name, str(value))
    console.print(table)


@app.command("probe")
def probe_backends() -> None:
    """Report which storage kinds are usable."""
    with StorageEngine(Settings()) as engine:
        for kind in (BackendKind.LOCAL, BackendKind.SESSION):
            if engine.supports(kind):
                console.print(f"{kind.value}: [green]available[/green]")
            else:
                console.print(f"{kind.value}: [yellow]unavailable, using in-memory fallback[/yellow]")


@app.command("init")
def init_project(
    directory: Path = typer.Argument(Path("."), help="Directory to initialize"),
    force: bool = typer.Option(False, "--force", help="Overwrite existing files"),
) -> None:
    """Initialize a Synaptic Store configuration."""
    directory = directory.resolve()

    if not directory.exists():
        directory.mkdir(parents=True)

    config_file = directory / ".env"
    data_dir = directory / "data"

    if config_file.exists() and not force:
        console.print(f"[yellow]Configuration file already exists: {config_file}[/yellow]")
        console.print("Use --force to overwrite")
        return

    data_dir.mkdir(exist_ok=True)

    config_content = """# Synaptic Store Configuration
DEBUG=false
LOG_LEVEL=INFO

# Storage
DEFAULT_STORAGE_KIND=session
UNDO_ENABLED=false
DURABLE_DATABASE_PATH=./data/durable.db
SESSION_DATABASE_PATH=:memory:

# Redis (optional, replaces SQLite for durable storage)
REDIS_URL=redis://localhost:6379/0
REDIS_ENABLED=false
"""

    config_file.write_text(config_content)
    console.print(f"[green]Initialized Synaptic Store in {directory}[/green]")
    console.print(f"Configuration file: {config_file}")
    console.print(f"Data directory: {data_dir}")


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from . import __version__
    console.print(f"Synaptic Store version {__version__}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
