"""Tests for release-version normalization and ordering."""

import pytest

from docc_retrieval.utils.versions import normalize_version, sort_versions, versions_from_tags


class TestNormalizeVersion:
    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("1.2.3", "1.2.0"),
            ("v1.2.9", "1.2.0"),
            ("V2.0", "2.0.0"),
            ("1.17.0-beta.1", "1.17.0"),
            ("3", "3"),
        ],
    )
    def test_normalizes_to_major_minor_zero(self, tag, expected):
        assert normalize_version(tag) == expected

    @pytest.mark.parametrize("tag", ["1.2.3", "v10.4.1", "7", "0.9"])
    def test_idempotent(self, tag):
        once = normalize_version(tag)
        assert normalize_version(once) == once


class TestSortVersions:
    def test_numeric_not_lexical(self):
        assert sort_versions(["2.0.0", "10.0.0", "9.0.0"]) == ["10.0.0", "9.0.0", "2.0.0"]

    def test_minor_components_compared_numerically(self):
        assert sort_versions(["1.9.0", "1.10.0", "1.2.0"]) == ["1.10.0", "1.9.0", "1.2.0"]

    def test_deduplicates(self):
        assert sort_versions(["1.2.0", "1.2.0"]) == ["1.2.0"]


def test_versions_from_tags_dedupes_after_normalizing():
    tags = ["v1.2.3", "1.2.9", "v1.10.0", "0.9.1", ""]
    assert versions_from_tags(tags) == ["1.10.0", "1.2.0", "0.9.0"]


def test_versions_from_tags_drops_bare_prefix():
    assert versions_from_tags(["v", "V", " ", "1.2.3"]) == ["1.2.0"]
