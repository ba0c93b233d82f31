"""Coordinates documentation lookups for the command-line interface."""

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.table import Table

from docc_retrieval.config import AppConfig, OutputFormat
from docc_retrieval.converter import format_render_node, truncate
from docc_retrieval.discovery import (
    Dependency,
    ExampleFinder,
    ExampleSearchResult,
    extract_local_documentation,
    is_local_path,
    load_package_resolved,
)
from docc_retrieval.fetcher import BaseFetcher, DocCJSONFetcher, FetcherError, HttpFetcher
from docc_retrieval.output import FileOutput
from docc_retrieval.patterns import PatternRegistry
from docc_retrieval.utils.url_utils import ensure_scheme, is_bare_repo_reference, parse_github_repo

logger = logging.getLogger(__name__)

DEFAULT_EXAMPLES_OWNER = "apple"


def normalize_source(source: str) -> str:
    """Turn CLI input into an absolute URL.

    ``owner/repo`` becomes a github.com reference; anything else without a
    scheme gets ``https://``.
    """
    source = source.strip()
    if is_bare_repo_reference(source):
        return f"https://github.com/{source}"
    return ensure_scheme(source)


@dataclass
class DependencyStatus:
    """A dependency and, when fetched, its documentation title or error."""

    dependency: Dependency
    title: str | None = None
    error: str | None = None

    @property
    def has_docs(self) -> bool:
        return self.title is not None


class Orchestrator:
    """Runs the docs, list and examples workflows."""

    def __init__(
        self,
        config: AppConfig,
        registry: PatternRegistry,
        console: Console | None = None,
        fetcher: BaseFetcher | None = None,
    ):
        self.config = config
        self.registry = registry
        self.console = console or Console()
        self._fetcher = fetcher

    def _docc_fetcher(self, base_url: str | None = None) -> DocCJSONFetcher:
        fetcher_config = self.config.fetcher
        if base_url:
            fetcher_config = fetcher_config.model_copy(update={"base_url": base_url})
        return DocCJSONFetcher(
            fetcher_config,
            self.registry,
            github=self.config.github,
            fetcher=self._fetcher or HttpFetcher(fetcher_config),
        )

    async def run_docs(self, source: str) -> str:
        """Fetch documentation for a URL, repository or local project.

        Returns the formatted output, which is also printed or written to the
        configured output path.
        """
        output_config = self.config.output

        if is_local_path(source):
            local = await extract_local_documentation(source)
            content = truncate(local.render(), output_config.limit)
        else:
            url = normalize_source(source)
            logger.debug("Fetching documentation for %s", url)
            async with self._docc_fetcher() as docc:
                node = await docc.fetch_documentation(url)
            content = format_render_node(node, output_config.format, output_config.limit)

        if output_config.path:
            written = await FileOutput(output_config.path).write(content)
            self.console.print(f"[green]Written to {written}[/green]")
        else:
            self.console.print(content, markup=False, highlight=False, soft_wrap=True)
        return content

    async def list_dependencies(self, path: str, fetch_docs: bool = False) -> list[DependencyStatus]:
        """Read Package.resolved and optionally probe each dependency for docs."""
        statuses = [DependencyStatus(dep) for dep in load_package_resolved(path)]
        if not fetch_docs:
            return statuses

        # One dependency at a time to stay polite with GitHub
        async with self._docc_fetcher("https://github.com") as docc:
            for status in statuses:
                if not status.dependency.url:
                    continue
                try:
                    node = await docc.fetch_documentation(status.dependency.url)
                except FetcherError as e:
                    logger.debug("No docs for %s: %s", status.dependency.name, e)
                    status.error = str(e)
                    continue
                status.title = node.title or "Found"
        return statuses

    def print_dependencies(
        self, statuses: list[DependencyStatus], fmt: OutputFormat, fetched: bool
    ) -> None:
        if fmt == OutputFormat.JSON:
            rows = [
                {
                    "name": s.dependency.name,
                    "url": s.dependency.url or "",
                    **({"docs": s.title} if fetched and s.title else {}),
                }
                for s in statuses
            ]
            self.console.print_json(data=rows)
            return

        table = Table(title=f"Dependencies ({len(statuses)} packages)")
        table.add_column("Package", style="cyan")
        table.add_column("Repository")
        if fetched:
            table.add_column("Documentation")

        for s in statuses:
            row = [s.dependency.name, s.dependency.repository or s.dependency.url or ""]
            if fetched:
                row.append(f"[green]{s.title}[/green]" if s.has_docs else "[yellow]No DocC found[/yellow]")
            table.add_row(*row)

        self.console.print(table)
        if not fetched:
            self.console.print("[dim]Use --fetch-docs to fetch documentation for all packages[/dim]")

    async def find_examples(self, package: str, keyword: str | None = None) -> ExampleSearchResult:
        """Search a repository's tree for example source files."""
        repo_url = package
        if is_bare_repo_reference(package):
            repo_url = f"https://github.com/{package}"
        elif "github.com" not in package:
            repo_url = f"https://github.com/{DEFAULT_EXAMPLES_OWNER}/{package}"
        parsed = parse_github_repo(repo_url)
        if parsed is None:
            raise ValueError(f"Could not parse owner/repo from {package}")

        owner, repo = parsed
        self.console.print(f"[blue]Searching for examples in {owner}/{repo}...[/blue]")
        fetcher = self._fetcher or HttpFetcher(self.config.fetcher)
        async with fetcher:
            return await ExampleFinder(fetcher, self.config.github).find(owner, repo, keyword)
