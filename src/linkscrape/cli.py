"""Command line interface for linkscrape."""

import asyncio
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from linkscrape import __version__
from linkscrape.config import Settings
from linkscrape.core.errors import ConfigurationError
from linkscrape.service import ScrapeService

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    """Send log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose)],
        force=True,
    )


def _load_settings(
    storage: Optional[str],
    output: Optional[Path],
    public_base_url: Optional[str],
) -> Settings:
    """Read settings from the environment and apply CLI overrides."""
    settings = Settings.from_env()
    overrides: dict[str, Any] = {}
    if storage:
        overrides["storage_backend"] = storage.lower()
    if output is not None:
        overrides["output_dir"] = output
        overrides.setdefault("storage_backend", "filesystem")
    if public_base_url:
        overrides["public_base_url"] = public_base_url
    return dataclasses.replace(settings, **overrides)


def _print_result(url: str, status: int, response: dict[str, Any]) -> None:
    if response["success"]:
        files = response["files"]
        console.print()
        console.print(
            Panel(
                f"[bold green]URL:[/bold green] {url}\n"
                f"[bold cyan]Stored:[/bold cyan] {len(files)}",
                title="[bold green]Scrape Complete![/bold green]",
                border_style="green",
            )
        )
        if files:
            table = Table(show_header=True, header_style="bold cyan")
            table.add_column("#", style="dim", justify="right")
            table.add_column("Location", style="green")
            for i, location in enumerate(files, 1):
                table.add_row(str(i), location)
            console.print(table)
    else:
        console.print(
            Panel(
                f"[red]{response['error']}[/red]",
                title=f"[bold red]Scrape Failed ({status})[/bold red]",
                border_style="red",
            )
        )


def _scrape(
    url: str,
    storage: Optional[str],
    output: Optional[Path],
    public_base_url: Optional[str],
    as_json: bool,
    verbose: bool,
) -> None:
    """Execute the scrape operation."""
    _configure_logging(verbose)

    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"

    try:
        settings = _load_settings(storage, output, public_base_url)
    except ConfigurationError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    service = ScrapeService(settings)

    try:
        status, response = asyncio.run(service.handle({"url": url}))
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(response, indent=2))
    else:
        _print_result(url, int(status), response)

    if not response["success"]:
        raise typer.Exit(1)


app = typer.Typer(
    name="linkscrape",
    help="Render every link on a page to Markdown and store it.",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


@app.command()
def scrape(
    url: Annotated[
        str,
        typer.Argument(help="Page whose links should be scraped"),
    ],
    storage: Annotated[
        Optional[str],
        typer.Option(
            "--storage",
            help="Storage backend: s3 or filesystem [default: LINKSCRAPE_STORAGE]",
        ),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "-o",
            "--output",
            help="Root directory for the filesystem backend (implies --storage filesystem)",
        ),
    ] = None,
    public_base_url: Annotated[
        Optional[str],
        typer.Option(
            "--public-base-url",
            help="Base URL under which stored objects are served",
        ),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the raw JSON response",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "-v",
            "--verbose",
            help="Verbose output",
        ),
    ] = False,
) -> None:
    """Scrape every link on a page to Markdown.

    \b
    Examples:
        linkscrape scrape https://example.com
        linkscrape scrape https://example.com -o ./out
        linkscrape scrape https://example.com --json
    """
    _scrape(url, storage, output, public_base_url, as_json, verbose)


@app.command("version")
def version() -> None:
    """Print the version."""
    console.print(f"[bold]linkscrape[/bold] version {__version__}")


def main() -> None:
    """Main entry point with smart argument handling.

    Allows both:
        linkscrape https://example.com
        linkscrape scrape https://example.com
    """
    if len(sys.argv) > 1:
        first_arg = sys.argv[1]
        if first_arg.startswith(("http://", "https://")) or (
            "." in first_arg
            and first_arg not in ("scrape", "version", "--help", "-h")
        ):
            sys.argv.insert(1, "scrape")

    app()


if __name__ == "__main__":
    main()
