"""Documentation sources beyond remote URLs: local bundles, manifests, examples."""

from docc_retrieval.discovery.examples import ExampleFinder, ExampleSearchResult, match_example_files
from docc_retrieval.discovery.local import (
    LocalDocumentation,
    extract_local_documentation,
    find_docc_bundles,
    is_local_path,
)
from docc_retrieval.discovery.manifest import Dependency, ManifestError, load_package_resolved

__all__ = [
    "Dependency",
    "ExampleFinder",
    "ExampleSearchResult",
    "LocalDocumentation",
    "ManifestError",
    "extract_local_documentation",
    "find_docc_bundles",
    "is_local_path",
    "load_package_resolved",
    "match_example_files",
]
