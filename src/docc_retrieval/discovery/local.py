"""Discovery of on-disk ``.docc`` documentation bundles."""

import logging
import os
from pathlib import Path

import aiofiles

from docc_retrieval.utils.ranking import markdown_rank_key

logger = logging.getLogger(__name__)

# Project docs first, then SwiftPM dependency checkouts
SEARCH_ROOTS = ["Sources", ".build/checkouts", "swiftpm-temp/checkouts"]


def is_local_path(source: str) -> bool:
    """Detect local paths (/, ~, ./ prefixes, or an existing file system entry)."""
    return source.startswith(("/", "~", "./")) or os.path.exists(source)


def find_docc_bundles(project: Path) -> list[Path]:
    """Find ``.docc`` directories under the project's search roots."""
    bundles: list[Path] = []
    for root in SEARCH_ROOTS:
        directory = project / root
        if not directory.is_dir():
            continue
        for current, dirnames, _ in os.walk(directory):
            dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
            for name in dirnames:
                if name.endswith(".docc"):
                    bundles.append(Path(current) / name)
    logger.debug("Found %d .docc bundles in %s", len(bundles), project)
    return bundles


def rank_bundle_markdown(bundle: Path) -> list[Path]:
    """Markdown files directly in a bundle, best candidate first.

    Files named after the module come first, then overviews, then the rest
    alphabetically.
    """
    files = [p for p in bundle.iterdir() if p.is_file() and p.suffix == ".md"]
    return sorted(files, key=lambda path: markdown_rank_key(path.stem, bundle.stem))


async def read_bundle_markdown(bundle: Path) -> str | None:
    """Read the main markdown file of a bundle, if it has one."""
    ranked = rank_bundle_markdown(bundle)
    if not ranked:
        return None
    async with aiofiles.open(ranked[0], "r", encoding="utf-8") as f:
        return await f.read()


class LocalDocumentation:
    """Markdown extracted from the first usable bundle of a project."""

    def __init__(self, title: str, markdown: str, bundle: Path):
        self.title = title
        self.markdown = markdown
        self.bundle = bundle

    def render(self) -> str:
        return f"# {self.title}\n{self.markdown}"


async def extract_local_documentation(path: str) -> LocalDocumentation:
    """Extract documentation from a local project directory.

    Raises FileNotFoundError when the path or any bundle content is missing.
    """
    project = Path(path).expanduser()
    if not project.exists():
        raise FileNotFoundError(f"Path does not exist: {project}")

    bundles = find_docc_bundles(project)
    if not bundles:
        raise FileNotFoundError(f"No .docc documentation found in {path}")

    for bundle in bundles:
        markdown = await read_bundle_markdown(bundle)
        if markdown is not None:
            return LocalDocumentation(bundle.stem, markdown, bundle)

    raise FileNotFoundError("Could not extract content from any .docc directory")
