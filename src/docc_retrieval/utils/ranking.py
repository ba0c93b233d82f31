"""Ordering of markdown files inside a ``.docc`` bundle."""


def markdown_rank_key(stem: str, bundle_name: str) -> tuple[bool, bool, str]:
    """Sort key: module-named files first, then overviews, then alphabetical."""
    stem = stem.lower()
    return (not stem.startswith(bundle_name.lower()), "overview" not in stem, stem)
