"""Output writers for extracted documentation."""

from docc_retrieval.output.writer import FileOutput

__all__ = [
    "FileOutput",
]
