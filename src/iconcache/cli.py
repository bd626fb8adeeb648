"""Click CLI for iconcache — resize images into the icon cache."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from iconcache.config.hierarchy import load_config_hierarchy
from iconcache.config.schema import IconCacheSettings
from iconcache.errors.exceptions import IconCacheError

if TYPE_CHECKING:
    from iconcache.core import IconCache

console = Console()
error_console = Console(stderr=True)

_SUPPORTED_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".tif", ".tiff", ".webp"}


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


def _load_settings(cache_dir: str | None = None, workers: int | None = None) -> IconCacheSettings:
    config = load_config_hierarchy(cache_dir=cache_dir, max_workers=workers)
    return IconCacheSettings.from_mapping(config)


@click.group()
@click.version_option(package_name="iconcache")
def cli() -> None:
    """iconcache — content-addressed image resize cache."""


@cli.command()
@click.argument("size", type=click.IntRange(min=1))
@click.argument("source", type=str)
@click.option("--cache-dir", type=click.Path(file_okay=False), help="Cache directory.")
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Concurrent workers for batch.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def resize(size: int, source: str, cache_dir: str | None, workers: int | None, verbose: int) -> None:
    """Resize SOURCE (file, directory or URL) to SIZE x SIZE and print the cached path."""
    _setup_logging(verbose)

    from iconcache.core import IconCache

    settings = _load_settings(cache_dir, workers)
    cache = IconCache.from_settings(settings)

    source_path = Path(source)
    try:
        if source_path.is_dir():
            _resize_batch(cache, size, source_path, settings.max_workers)
        else:
            result = cache.resize_and_cache_result(size, source)
            if result.path is None:
                error_console.print("[yellow]Nothing to resize.[/yellow]")
                sys.exit(1)
            click.echo(str(result.path))
            if result.degraded:
                error_console.print(f"[yellow]Degraded:[/yellow] {result.reason}")
                sys.exit(2)
    except IconCacheError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    finally:
        cache.close()


def _resize_batch(cache: IconCache, size: int, input_dir: Path, max_workers: int) -> None:
    """Resize all supported images in a directory."""
    from iconcache.concurrency.pool import ResizePool

    files = [f for f in sorted(input_dir.iterdir()) if f.suffix.lower() in _SUPPORTED_SUFFIXES]
    if not files:
        error_console.print("[yellow]No supported images found in directory.[/yellow]")
        return

    pool = ResizePool(cache, max_workers=max_workers)
    results = asyncio.run(pool.process_batch(size, files))

    table = Table(title="Resized Images", show_header=True)
    table.add_column("Source", style="cyan")
    table.add_column("Status")
    table.add_column("Cached file")
    for file, result in zip(files, results, strict=True):
        status = result.status.value
        if result.degraded:
            status = f"[yellow]{status}[/yellow]"
        table.add_row(file.name, status, str(result.path))
    console.print(table)


@cli.command()
@click.argument("size", type=click.IntRange(min=1))
@click.option("--cache-dir", type=click.Path(file_okay=False), help="Cache directory.")
def transparent(size: int, cache_dir: str | None) -> None:
    """Print the path of a fully transparent SIZE x SIZE icon."""
    from iconcache.core import IconCache

    cache = IconCache.from_settings(_load_settings(cache_dir))
    try:
        click.echo(str(cache.transparent_image(size)))
    finally:
        cache.close()


@cli.command()
@click.option("--tray-scale", type=float, default=0.0, help="Tray scaling factor reported by the display.")
@click.option("--menu-scale", type=float, default=0.0, help="Menu scaling factor reported by the display.")
def sizes(tray_scale: float, menu_scale: float) -> None:
    """Show tray and menu icon sizes for a display scaling factor."""
    from iconcache.config.display import display_config_for
    from iconcache.types import ScalingFactor

    settings = _load_settings()
    display = display_config_for(
        ScalingFactor(tray=tray_scale, menu=menu_scale),
        default_tray_size=settings.tray_size,
        default_menu_size=settings.entry_size,
    )

    table = Table(title="Icon Sizes", show_header=True)
    table.add_column("Icon", style="cyan")
    table.add_column("Size (px)")
    table.add_row("Tray", str(display.tray_size))
    table.add_row("Menu entry", str(display.entry_size))
    console.print(table)


@cli.group()
def cache() -> None:
    """Cache management commands."""


@cache.command("stats")
@click.option("--cache-dir", type=click.Path(file_okay=False), help="Cache directory.")
def cache_stats(cache_dir: str | None) -> None:
    """Show cache statistics."""
    from iconcache.cache.store import DiskStore

    store = DiskStore(_load_settings(cache_dir).cache_dir)

    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Directory", str(store.cache_dir))
    table.add_row("Entries", str(store.entry_count))
    table.add_row("Size (MB)", f"{store.size_mb:.2f}")

    console.print(table)


@cache.command("clear")
@click.option("--cache-dir", type=click.Path(file_okay=False), help="Cache directory.")
@click.confirmation_option(prompt="Are you sure you want to clear the cache?")
def cache_clear(cache_dir: str | None) -> None:
    """Delete all cached images."""
    from iconcache.cache.store import DiskStore

    removed = DiskStore(_load_settings(cache_dir).cache_dir).clear()
    console.print(f"[green]Cache cleared ({removed} files).[/green]")


def main() -> None:
    """Entry point for the CLI."""
    cli()
