"""Render decoded documentation as JSON or plain text."""

import json

from docc_retrieval.config import OutputFormat
from docc_retrieval.models import DocCRenderNode

TRUNCATION_MARKER = "\n... (truncated)"


def truncate(text: str, limit: int) -> str:
    """Cut text to ``limit`` characters; 0 means unlimited."""
    if limit > 0 and len(text) > limit:
        return text[:limit] + TRUNCATION_MARKER
    return text


def format_render_node(node: DocCRenderNode, fmt: OutputFormat, limit: int = 0) -> str:
    """Format a render node for display."""
    if fmt == OutputFormat.JSON:
        output = json.dumps(node.to_json_dict(), indent=2, sort_keys=True, ensure_ascii=False)
    else:
        output = f"# {node.title or 'Untitled'}\n{node.abstract_text}"
    return truncate(output, limit)
