"""Tests for local bundle scanning, manifest parsing and example search."""

import json

import pytest

from docc_retrieval.config import GitHubConfig
from docc_retrieval.discovery import (
    ExampleFinder,
    ManifestError,
    extract_local_documentation,
    find_docc_bundles,
    is_local_path,
    load_package_resolved,
    match_example_files,
)
from docc_retrieval.discovery.local import rank_bundle_markdown
from docc_retrieval.fetcher import NotFoundError
from docc_retrieval.utils import markdown_rank_key


def make_bundle(root, relative, files):
    bundle = root / relative
    bundle.mkdir(parents=True)
    for name, text in files.items():
        (bundle / name).write_text(text, encoding="utf-8")
    return bundle


# -----------------------------------------------------------------------
# Local .docc bundles
# -----------------------------------------------------------------------


class TestLocalBundles:
    def test_is_local_path(self, tmp_path):
        assert is_local_path("/abs/path")
        assert is_local_path("~/project")
        assert is_local_path("./project")
        assert is_local_path(str(tmp_path))
        assert not is_local_path("https://developer.apple.com/documentation/swiftui")
        assert not is_local_path("acme/widget-kit")

    def test_finds_bundles_in_sources_and_checkouts(self, tmp_path):
        make_bundle(tmp_path, "Sources/Kit/Kit.docc", {"Kit.md": "# Kit"})
        make_bundle(tmp_path, ".build/checkouts/dep/Sources/Dep/Dep.docc", {"Dep.md": "# Dep"})
        make_bundle(tmp_path, "Sources/.hidden/Secret.docc", {"Secret.md": "# Secret"})

        names = [b.name for b in find_docc_bundles(tmp_path)]
        assert names == ["Kit.docc", "Dep.docc"]

    def test_markdown_ranking(self, tmp_path):
        bundle = make_bundle(
            tmp_path,
            "Sources/Kit/Kit.docc",
            {"Articles.md": "a", "GettingOverview.md": "b", "KitBasics.md": "c", "notes.txt": "d"},
        )
        assert [p.name for p in rank_bundle_markdown(bundle)] == [
            "KitBasics.md",
            "GettingOverview.md",
            "Articles.md",
        ]

    def test_rank_key_module_then_overview(self):
        assert sorted(["Overview", "kitbasics", "Articles"], key=lambda s: markdown_rank_key(s, "Kit")) == [
            "kitbasics",
            "Overview",
            "Articles",
        ]

    @pytest.mark.asyncio
    async def test_extract_local_documentation(self, tmp_path):
        make_bundle(tmp_path, "Sources/Kit/Kit.docc", {"Kit.md": "Kit overview text."})

        local = await extract_local_documentation(str(tmp_path))

        assert local.title == "Kit"
        assert local.render() == "# Kit\nKit overview text."

    @pytest.mark.asyncio
    async def test_extract_without_bundles(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="No .docc documentation"):
            await extract_local_documentation(str(tmp_path))

    @pytest.mark.asyncio
    async def test_extract_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="does not exist"):
            await extract_local_documentation(str(tmp_path / "missing"))


# -----------------------------------------------------------------------
# Package.resolved
# -----------------------------------------------------------------------


class TestPackageResolved:
    def test_v2_format(self, tmp_path):
        (tmp_path / "Package.resolved").write_text(
            json.dumps(
                {
                    "pins": [
                        {"identity": "swift-nio", "location": "https://github.com/apple/swift-nio.git"},
                        {"identity": "local-thing"},
                    ],
                    "version": 2,
                }
            )
        )

        deps = load_package_resolved(tmp_path)

        assert [d.name for d in deps] == ["swift-nio", "local-thing"]
        assert deps[0].repository == "apple/swift-nio"
        assert deps[1].url is None
        assert deps[1].repository is None

    def test_v1_format(self, tmp_path):
        (tmp_path / "Package.resolved").write_text(
            json.dumps(
                {
                    "object": {
                        "pins": [
                            {
                                "package": "Alamofire",
                                "repositoryURL": "https://github.com/Alamofire/Alamofire",
                            }
                        ]
                    },
                    "version": 1,
                }
            )
        )

        deps = load_package_resolved(tmp_path)

        assert deps[0].name == "Alamofire"
        assert deps[0].repository == "Alamofire/Alamofire"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError, match="not found"):
            load_package_resolved(tmp_path)

    def test_malformed_file(self, tmp_path):
        (tmp_path / "Package.resolved").write_text("{not json")
        with pytest.raises(ManifestError, match="Failed to parse"):
            load_package_resolved(tmp_path)


# -----------------------------------------------------------------------
# Example search
# -----------------------------------------------------------------------

TREE = [
    {"path": "Examples/Chat/main.swift", "type": "blob"},
    {"path": "Examples", "type": "tree"},
    {"path": "Sources/NIO/Channel.swift", "type": "blob"},
    {"path": "Tests/NIOTests/ChannelTests.swift", "type": "blob"},
    {"path": "Examples/README.md", "type": "blob"},
]


class TestExamples:
    def test_match_example_files(self):
        assert match_example_files(TREE) == [
            "Examples/Chat/main.swift",
            "Tests/NIOTests/ChannelTests.swift",
        ]

    def test_keyword_filter_is_case_insensitive(self):
        assert match_example_files(TREE, keyword="CHAT") == ["Examples/Chat/main.swift"]

    @pytest.mark.asyncio
    async def test_finder_uses_tree_api(self, server, http_fetcher):
        url = "https://api.github.com/repos/apple/swift-nio/git/trees/main?recursive=1"
        server.add_json(url, {"tree": TREE})

        async with http_fetcher:
            result = await ExampleFinder(http_fetcher, GitHubConfig()).find("apple", "swift-nio")

        assert result.files == ["Examples/Chat/main.swift", "Tests/NIOTests/ChannelTests.swift"]
        assert server.requests[0].headers["Accept"] == "application/vnd.github.v3+json"

    @pytest.mark.asyncio
    async def test_finder_missing_repo(self, http_fetcher):
        async with http_fetcher:
            with pytest.raises(NotFoundError):
                await ExampleFinder(http_fetcher, GitHubConfig()).find("apple", "missing")
