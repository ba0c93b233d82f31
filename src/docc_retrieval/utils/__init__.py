"""Utility functions."""

from docc_retrieval.utils.ranking import markdown_rank_key
from docc_retrieval.utils.url_utils import ensure_scheme, parse_github_repo, to_absolute_url
from docc_retrieval.utils.versions import normalize_version, sort_versions, versions_from_tags

__all__ = [
    "markdown_rank_key",
    "ensure_scheme",
    "parse_github_repo",
    "to_absolute_url",
    "normalize_version",
    "sort_versions",
    "versions_from_tags",
]
