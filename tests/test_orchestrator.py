"""Tests for the CLI workflow coordinator."""

import io

import pytest
from rich.console import Console

from docc_retrieval.config import AppConfig, OutputFormat
from docc_retrieval.fetcher import NotFoundError
from docc_retrieval.orchestrator import Orchestrator, normalize_source
from docc_retrieval.patterns import PatternRegistry

APPLE_JSON = "https://developer.apple.com/tutorials/data/documentation/exampleframework.json"


def make_orchestrator(http_fetcher, config=None):
    console = Console(file=io.StringIO(), width=200)
    return Orchestrator(config or AppConfig(), PatternRegistry.default(), console, fetcher=http_fetcher)


def test_normalize_source():
    assert normalize_source("acme/widget-kit") == "https://github.com/acme/widget-kit"
    assert normalize_source("docs.example.com/documentation/kit") == (
        "https://docs.example.com/documentation/kit"
    )
    assert normalize_source("https://github.com/acme/kit") == "https://github.com/acme/kit"


# --- docs ---


@pytest.mark.asyncio
async def test_run_docs_remote_text(server, http_fetcher, node_payload):
    server.add_json(APPLE_JSON, node_payload())
    orchestrator = make_orchestrator(http_fetcher)

    content = await orchestrator.run_docs("developer.apple.com/documentation/exampleframework")

    assert content == "# Example\nAn example framework."
    assert "An example framework." in orchestrator.console.file.getvalue()


@pytest.mark.asyncio
async def test_run_docs_writes_file(tmp_path, server, http_fetcher, node_payload):
    server.add_json(APPLE_JSON, node_payload())
    config = AppConfig()
    config.output.format = OutputFormat.JSON
    config.output.path = tmp_path / "node.json"
    orchestrator = make_orchestrator(http_fetcher, config)

    await orchestrator.run_docs("https://developer.apple.com/documentation/exampleframework")

    written = config.output.path.read_text(encoding="utf-8")
    assert '"schemaVersion"' in written
    assert "Written to" in orchestrator.console.file.getvalue()


@pytest.mark.asyncio
async def test_run_docs_propagates_not_found(http_fetcher):
    orchestrator = make_orchestrator(http_fetcher)
    with pytest.raises(NotFoundError):
        await orchestrator.run_docs("https://developer.apple.com/documentation/missing")


# --- list ---


@pytest.mark.asyncio
async def test_list_dependencies_fetches_docs_in_order(tmp_path, server, http_fetcher, node_payload):
    (tmp_path / "Package.resolved").write_text(
        '{"pins": ['
        '{"identity": "kit", "location": "https://acme.github.io/kit/documentation/kit"},'
        '{"identity": "gone", "location": "https://acme.github.io/gone/documentation/gone"}'
        "]}",
        encoding="utf-8",
    )
    server.add_json("https://acme.github.io/kit/data/documentation/kit.json", node_payload(title="Kit"))
    orchestrator = make_orchestrator(http_fetcher)

    statuses = await orchestrator.list_dependencies(str(tmp_path), fetch_docs=True)

    assert [s.dependency.name for s in statuses] == ["kit", "gone"]
    assert statuses[0].title == "Kit"
    assert not statuses[1].has_docs
    assert statuses[1].error
    assert server.urls[0] == "https://acme.github.io/kit/data/documentation/kit.json"


@pytest.mark.asyncio
async def test_list_dependencies_without_fetch_makes_no_requests(tmp_path, server, http_fetcher):
    (tmp_path / "Package.resolved").write_text(
        '{"pins": [{"identity": "kit", "location": "https://github.com/acme/kit.git"}]}',
        encoding="utf-8",
    )
    orchestrator = make_orchestrator(http_fetcher)

    statuses = await orchestrator.list_dependencies(str(tmp_path))

    assert len(statuses) == 1
    assert server.requests == []


# --- examples ---


@pytest.mark.asyncio
async def test_find_examples_accepts_owner_repo(server, http_fetcher):
    server.add_json(
        "https://api.github.com/repos/acme/kit/git/trees/main?recursive=1",
        {"tree": [{"path": "Examples/Demo/main.swift", "type": "blob"}]},
    )
    orchestrator = make_orchestrator(http_fetcher)

    result = await orchestrator.find_examples("acme/kit")

    assert (result.owner, result.repo) == ("acme", "kit")
    assert result.files == ["Examples/Demo/main.swift"]


@pytest.mark.asyncio
async def test_find_examples_defaults_owner(server, http_fetcher):
    orchestrator = make_orchestrator(http_fetcher)

    with pytest.raises(NotFoundError):
        await orchestrator.find_examples("swift-nio")

    assert server.urls == ["https://api.github.com/repos/apple/swift-nio/git/trees/main?recursive=1"]
