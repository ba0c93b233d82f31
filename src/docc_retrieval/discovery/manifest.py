"""Dependency parsing from SwiftPM ``Package.resolved`` files."""

import json
from pathlib import Path

from pydantic import BaseModel

from docc_retrieval.utils.url_utils import parse_github_repo


class ManifestError(Exception):
    """Package.resolved is missing or unreadable."""


class Dependency(BaseModel):
    """A resolved package pin."""

    name: str
    url: str | None = None

    @property
    def repository(self) -> str | None:
        """owner/repo when the pin points at github.com."""
        if not self.url or "github.com" not in self.url:
            return None
        parsed = parse_github_repo(self.url)
        return f"{parsed[0]}/{parsed[1]}" if parsed else None


def parse_package_resolved(data: dict) -> list[Dependency]:
    """Extract pins from v2/v3 (top-level ``pins``) or v1 (``object.pins``)."""
    if isinstance(data.get("pins"), list):
        return [
            Dependency(name=pin.get("identity") or "unknown", url=pin.get("location"))
            for pin in data["pins"]
            if isinstance(pin, dict)
        ]

    obj = data.get("object")
    if isinstance(obj, dict) and isinstance(obj.get("pins"), list):
        return [
            Dependency(name=pin.get("package") or "unknown", url=pin.get("repositoryURL"))
            for pin in obj["pins"]
            if isinstance(pin, dict)
        ]
    return []


def load_package_resolved(project: Path) -> list[Dependency]:
    """Load dependencies from ``<project>/Package.resolved``."""
    resolved = Path(project).expanduser() / "Package.resolved"
    if not resolved.exists():
        raise ManifestError(f"Package.resolved not found in {project}")
    try:
        with open(resolved, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ManifestError(f"Failed to parse {resolved}: {e}") from e
    if not isinstance(data, dict):
        raise ManifestError(f"Failed to parse {resolved}: not a JSON object")
    return parse_package_resolved(data)
