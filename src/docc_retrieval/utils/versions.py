"""Release-version helpers for versioned documentation lookups."""

import re
from collections.abc import Iterable

_NUMERIC_RUN_RE = re.compile(r"\d+|\D+")


def normalize_version(tag: str) -> str:
    """Normalize a release tag to ``major.minor.0``.

    A leading ``v`` is dropped. Tags with fewer than two dot-separated
    components are returned unchanged. Normalizing twice gives the same result.
    """
    version = tag.strip()
    if version[:1] in ("v", "V"):
        version = version[1:]
    components = version.split(".")
    if len(components) >= 2:
        return f"{components[0]}.{components[1]}.0"
    return version


def _numeric_key(version: str) -> tuple:
    # Digit runs compare as integers so 10.0.0 sorts above 9.0.0.
    key = []
    for run in _NUMERIC_RUN_RE.findall(version):
        if run.isdigit():
            key.append((0, int(run), ""))
        else:
            key.append((1, 0, run))
    return tuple(key)


def sort_versions(versions: Iterable[str]) -> list[str]:
    """Deduplicate and sort versions newest first using numeric comparison."""
    return sorted(set(versions), key=_numeric_key, reverse=True)


def versions_from_tags(tags: Iterable[str]) -> list[str]:
    """Normalize, deduplicate and order release tags."""
    return sort_versions(v for v in map(normalize_version, tags) if v)
