"""CLI entry point for langcache.

Provides commands:
  - transcripts: Fetch a TED talk's transcripts in every locale
  - wiki: Fetch every language version of a set of Wikipedia articles
  - status: Show what is currently in the cache
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Awaitable, Callable, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from langcache.config import FetchConfig, load_fetch_config
from langcache.constants import (
    TED_LOCALES,
    TED_SUBDIR,
    TED_TALK_ID,
    WIKI_SUBDIR,
    WIKI_TITLES,
)
from langcache.exceptions import InvalidLocaleError, InvalidTitleError
from langcache.models import Locale, RunSummary

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="langcache - Cache multilingual TED transcripts and Wikipedia articles",
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


@app.callback()
def app_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log request details and retries"),
    ] = False,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a JSON config file", dir_okay=False),
    ] = None,
) -> None:
    """Configure logging and load settings shared by all commands."""
    _setup_logging(verbose)
    try:
        ctx.obj = load_fetch_config(config_path)
    except (OSError, ValueError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(code=2)


def get_config(ctx: typer.Context) -> FetchConfig:
    """Config loaded by the callback, or defaults when invoked directly."""
    if ctx.obj is None:
        ctx.obj = FetchConfig()
    return ctx.obj


def _run_pipeline(
    make_run: Callable[[], Awaitable[RunSummary]],
    progress: object | None,
) -> RunSummary:
    if progress is None:
        return asyncio.run(make_run())
    with progress:
        return asyncio.run(make_run())


def _print_summary(title: str, summary: RunSummary) -> None:
    logger.debug("%s run finished: %s", title, summary.to_dict())
    table = Table(title=f"{title} Summary")
    table.add_column("Metric", style="bold")
    table.add_column("Count", justify="right")
    table.add_row("Written", f"[green]{summary.written}[/green]")
    table.add_row("Already cached", f"[yellow]{summary.skipped}[/yellow]")
    table.add_row("Failed", f"[red]{summary.failed}[/red]")
    console.print(table)

    if summary.ok:
        console.print(Panel("[green]Finished with no errors[/green]", title=title))
        return

    errors = Table(title="Errors")
    errors.add_column("Unit", style="cyan")
    errors.add_column("Error")
    for failure in summary.failures:
        errors.add_row(escape(failure.label), escape(failure.describe()))
    console.print(errors)
    console.print(
        Panel(f"[red]Finished with {summary.failed} error(s)[/red]", title=title)
    )


@app.command()
def transcripts(
    ctx: typer.Context,
    talk_id: Annotated[
        int,
        typer.Option("--talk-id", "-t", help="TED talk identifier"),
    ] = TED_TALK_ID,
    locale: Annotated[
        Optional[list[str]],
        typer.Option("--locale", "-l", help="Locale to fetch (repeatable; default: all)"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Cache root directory", file_okay=False),
    ] = None,
    progress: Annotated[
        bool,
        typer.Option("--progress", help="Show a progress bar"),
    ] = False,
) -> None:
    """Fetch a talk's transcripts and cache them as JSON and plain text.

    The talk's cache directory is emptied before fetching.
    """
    from langcache.client import JsonApiClient
    from langcache.progress import FetchProgressTracker
    from langcache.transcripts import TranscriptFetcher

    config = get_config(ctx)
    try:
        locales = [Locale.parse(code) for code in (locale or TED_LOCALES)]
    except InvalidLocaleError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=2)

    root = (output or config.output_root) / TED_SUBDIR
    tracker = FetchProgressTracker(f"Talk {talk_id}") if progress else None

    async def _run() -> RunSummary:
        with JsonApiClient(config) as client:
            fetcher = TranscriptFetcher(client, talk_id, locales, root, progress=tracker)
            return await fetcher.run()

    console.print(
        Panel(
            f"Talk [bold]{talk_id}[/bold] in [bold]{len(locales)}[/bold] locales\n"
            f"Output: {root / str(talk_id)}",
            title="Transcripts",
        )
    )
    summary = _run_pipeline(_run, tracker)
    _print_summary("Transcripts", summary)
    raise typer.Exit(code=summary.exit_code)


@app.command()
def wiki(
    ctx: typer.Context,
    title: Annotated[
        Optional[list[str]],
        typer.Option("--title", "-T", help="Article title in English (repeatable; default: built-in list)"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Cache root directory", file_okay=False),
    ] = None,
    progress: Annotated[
        bool,
        typer.Option("--progress", help="Show a progress bar"),
    ] = False,
) -> None:
    """Fetch every language version of the given articles.

    Files already in the cache are skipped, so re-running resumes.
    """
    from langcache.client import JsonApiClient
    from langcache.progress import FetchProgressTracker
    from langcache.wiki import WikiClient, WikiFetcher, validate_title

    config = get_config(ctx)
    try:
        titles = [validate_title(t) for t in (title or WIKI_TITLES)]
    except InvalidTitleError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=2)
    root = (output or config.output_root) / WIKI_SUBDIR
    tracker = FetchProgressTracker("Wikipedia") if progress else None

    async def _run() -> RunSummary:
        with JsonApiClient(config) as client:
            fetcher = WikiFetcher(WikiClient(client), titles, root, progress=tracker)
            return await fetcher.run()

    console.print(
        Panel(
            f"[bold]{len(titles)}[/bold] titles\nOutput: {root}",
            title="Wikipedia",
        )
    )
    summary = _run_pipeline(_run, tracker)
    _print_summary("Wikipedia", summary)
    raise typer.Exit(code=summary.exit_code)


@app.command()
def status(
    ctx: typer.Context,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Cache root directory", file_okay=False),
    ] = None,
) -> None:
    """Show how many files are cached per talk and per article."""
    from langcache.status import manifest_page_count, scan_cache

    root = output or get_config(ctx).output_root
    entries = scan_cache(root)
    if not entries:
        console.print(f"[yellow]Cache at {root} is empty.[/yellow]")
        return

    table = Table(title=f"Cache: {root}")
    table.add_column("Source", style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("JSON", justify="right")
    table.add_column("TXT", justify="right")
    table.add_column("HTML", justify="right")
    for entry in entries:
        table.add_row(
            entry.source,
            entry.name,
            str(entry.json_files),
            str(entry.txt_files),
            str(entry.html_files) if entry.source == "wikipedia" else "-",
        )
    console.print(table)

    pages = manifest_page_count(root)
    if pages is not None:
        console.print(f"Wikipedia manifest: [bold]{pages}[/bold] page records")


if __name__ == "__main__":
    app()
