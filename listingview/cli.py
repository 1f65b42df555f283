"""CLI interface for ListingView."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console

from listingview.config import load_config
from listingview.query import parse_sort
from listingview.render import build_stats_panel, render_view
from listingview.sources import ListingSourceError, load_listings
from listingview.view.controller import BuildingView

app = typer.Typer(
    name="listingview",
    help="Browse, filter and summarize the classifieds of a building.",
    no_args_is_help=True,
)
console = Console()


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_filter_options(options: list[str] | None) -> dict[str, str]:
    """Turn repeated ``field=value`` options into a filter mapping."""
    filters: dict[str, str] = {}
    for option in options or []:
        name, sep, value = option.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"Expected field=value, got {option!r}", param_hint="--filter")
        filters[name.strip()] = value.strip()
    return filters


def _open_view(source: str, config_path: Path | None, filters: list[str] | None, sort: str | None) -> tuple:
    cfg = load_config(config_path)
    try:
        store = asyncio.run(load_listings(source, cfg.source))
    except (ListingSourceError, ValidationError, httpx.HTTPError, OSError) as e:
        console.print(f"[red]Could not load listings: {e}[/red]")
        raise typer.Exit(code=1)

    view = BuildingView(
        store,
        filters=parse_filter_options(filters),
        sort=parse_sort(sort) or cfg.view.default_sort,
        page_size=cfg.view.page_size,
    )
    return cfg, view


@app.command()
def show(
    source: str = typer.Argument(..., help="Path or URL of a building listings JSON payload"),
    filters: Optional[list[str]] = typer.Option(None, "--filter", "-f", help="Equality filter, e.g. type=rent"),
    sort: str = typer.Option(None, "--sort", "-s", help="Sort field, prefix with '-' for descending"),
    page: int = typer.Option(1, "--page", "-p", help="1-based page number"),
    page_size: int = typer.Option(None, "--page-size", min=1, help="Override rows per page"),
    config_path: Path = typer.Option(None, "--config", "-c", help="Path to config TOML file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Show one page of a building's classifieds with price statistics."""
    setup_logging(verbose)
    cfg, view = _open_view(source, config_path, filters, sort)
    if page_size is not None:
        view.set_page_size(page_size)
    view.goto_page(page)
    console.print(render_view(view, cfg.display))


@app.command()
def stats(
    source: str = typer.Argument(..., help="Path or URL of a building listings JSON payload"),
    filters: Optional[list[str]] = typer.Option(None, "--filter", "-f", help="Equality filter, e.g. type=rent"),
    config_path: Path = typer.Option(None, "--config", "-c"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Print price statistics for the filtered classifieds."""
    setup_logging(verbose)
    cfg, view = _open_view(source, config_path, filters, None)
    console.print(f"[bold]{view.total} matching listings[/bold]")
    console.print(build_stats_panel(view.stats, cfg.display))


@app.command()
def config_show(
    config_path: Path = typer.Option(None, "--config", "-c"),
):
    """Display current configuration."""
    cfg = load_config(config_path)
    console.print_json(json.dumps(cfg.model_dump(), indent=2, default=str))


if __name__ == "__main__":
    app()
