"""Output formatting for decoded documentation."""

from docc_retrieval.converter.formatter import format_render_node, truncate

__all__ = [
    "format_render_node",
    "truncate",
]
