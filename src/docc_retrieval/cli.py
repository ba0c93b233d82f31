"""Command-line interface for docc-retrieval."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from docc_retrieval import __version__
from docc_retrieval.config import AppConfig, OutputFormat
from docc_retrieval.discovery import ManifestError
from docc_retrieval.fetcher import DocCJSONFetcher, FetcherError, TableOfContentsPage
from docc_retrieval.orchestrator import Orchestrator, normalize_source
from docc_retrieval.patterns import PatternRegistry

app = typer.Typer(
    name="docc-retrieval",
    help="Fetch DocC documentation from URLs, GitHub repositories and local projects.",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool):
    if value:
        console.print(f"docc-retrieval version {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _load_config(config_path: Optional[Path]) -> AppConfig:
    if config_path is None:
        return AppConfig()
    try:
        return AppConfig.from_toml(config_path)
    except (OSError, ValueError) as e:
        err_console.print(f"[red]Invalid config {config_path}: {e}[/red]")
        raise typer.Exit(2)


def _parse_format(value: str) -> OutputFormat:
    try:
        return OutputFormat(value)
    except ValueError:
        err_console.print(f"[red]Invalid format: {value}. Use 'json' or 'text'.[/red]")
        raise typer.Exit(2)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
):
    """DocC documentation retrieval tool."""
    pass


@app.command()
def docs(
    source: str = typer.Argument(..., help="URL, owner/repo, or local project path"),
    fmt: str = typer.Option("text", "--format", "-F", help="Output format: 'json' or 'text'"),
    limit: int = typer.Option(0, "--limit", help="Truncate output to N characters (0 = unlimited)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write output to a file"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="TOML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """
    Extract documentation from a URL or local path.

    Examples:

        docc-retrieval docs https://developer.apple.com/documentation/swiftui

        docc-retrieval docs https://github.com/apple/swift-nio

        docc-retrieval docs pointfreeco/swift-composable-architecture --format json

        docc-retrieval docs ./MyPackage
    """
    _setup_logging(verbose)
    config = _load_config(config_path)
    config.output.format = _parse_format(fmt)
    config.output.limit = max(limit, 0)
    if output is not None:
        config.output.path = output
    config.verbose = verbose

    orchestrator = Orchestrator(config, PatternRegistry.default(config.github.pages_suffix), console)
    try:
        asyncio.run(orchestrator.run_docs(source))
    except TableOfContentsPage as e:
        err_console.print(f"[yellow]{e.guidance}[/yellow]")
        raise typer.Exit(1)
    except (FetcherError, OSError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Error extracting documentation: {e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Cancelled.[/yellow]")
        raise typer.Exit(130)


app.command("extract", hidden=True, help="Alias for docs.")(docs)


@app.command("list")
def list_dependencies(
    path: Path = typer.Option(Path("."), "--path", "-p", help="Path to the project directory"),
    fetch_docs: bool = typer.Option(False, "--fetch-docs", help="Fetch documentation for all dependencies"),
    fmt: str = typer.Option("text", "--format", "-F", help="Output format: 'json' or 'text'"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="TOML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """List project dependencies and their documentation status."""
    _setup_logging(verbose)
    config = _load_config(config_path)
    output_format = _parse_format(fmt)

    orchestrator = Orchestrator(config, PatternRegistry.default(config.github.pages_suffix), console)
    try:
        statuses = asyncio.run(orchestrator.list_dependencies(str(path), fetch_docs))
    except ManifestError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        err_console.print("Run 'swift package resolve' first")
        raise typer.Exit(1)

    if not statuses:
        console.print("No dependencies found")
        return
    orchestrator.print_dependencies(statuses, output_format, fetch_docs)


@app.command()
def examples(
    package: str = typer.Argument(..., help="Package name or GitHub URL"),
    keyword: Optional[str] = typer.Option(None, "--filter", "-f", help="Filter examples by keyword"),
    limit: int = typer.Option(10, "--limit", help="Maximum number of examples"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="TOML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """Find code examples in a GitHub repository."""
    _setup_logging(verbose)
    config = _load_config(config_path)
    orchestrator = Orchestrator(config, PatternRegistry.default(config.github.pages_suffix), console)

    try:
        result = asyncio.run(orchestrator.find_examples(package, keyword))
    except (FetcherError, ValueError) as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not result.files:
        console.print("No example files found")
        return

    console.print(f"\n[bold]Found {len(result.files)} example files:[/bold]")
    for index, file in enumerate(result.files[:limit], start=1):
        console.print(f"{index}. {file}")
    if len(result.files) > limit:
        console.print(
            f"\n... and {len(result.files) - limit} more. Use --limit to see more."
        )


@app.command()
def resolve(
    source: str = typer.Argument(..., help="URL or owner/repo to route"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="TOML config file"),
):
    """Show which pattern handles a URL and the JSON path it maps to."""
    config = _load_config(config_path)
    fetcher = DocCJSONFetcher(config.fetcher, github=config.github)
    try:
        resolved = fetcher.describe(normalize_source(source))
    except FetcherError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("URL", resolved.url)
    table.add_row("Handler", f"{resolved.handler} (priority: {resolved.priority})")
    table.add_row("Response type", resolved.response_type.value)
    table.add_row("JSON path", resolved.json_path)
    table.add_row("Request URL", resolved.request_url or "[dim](resolved at fetch time)[/dim]")
    console.print(table)


@app.command("list-patterns")
def list_patterns(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="TOML config file"),
):
    """List registered URL pattern handlers in dispatch order."""
    config = _load_config(config_path)
    registry = PatternRegistry.default(config.github.pages_suffix)

    table = Table(title="URL Pattern Handlers")
    table.add_column("Identifier", style="cyan")
    table.add_column("Priority", justify="right")
    table.add_column("Response Type")

    for handler in registry.handlers:
        table.add_row(handler.identifier, str(handler.priority), handler.response_type.value)

    console.print(table)


if __name__ == "__main__":
    app()
