"""Tests for version parsing, ordering and the ~> bump rule."""

from __future__ import annotations

import pytest

from artifactns.core.requirement import Version, is_version, sort_versions
from artifactns.exceptions import InvalidVersionError


class TestIsVersion:
    """Syntactic version check."""

    @pytest.mark.parametrize("value", ["1", "1.2.15", "2.5.6.SEC01", "1.0.beta2", " 1.0 "])
    def test_valid(self, value: str) -> None:
        assert is_version(value)

    @pytest.mark.parametrize(
        "value",
        ["", "1.0-SNAPSHOT", ">1.0", "1 2", "..", "1.\u0661", "1.0\u00e9", "1.0\n", None, 1.0],
    )
    def test_invalid(self, value: object) -> None:
        assert not is_version(value)

    def test_constructor_rejects_invalid(self) -> None:
        with pytest.raises(InvalidVersionError):
            Version("1.0-SNAPSHOT")


class TestOrdering:
    """Segment-wise comparison."""

    def test_numeric_segments(self) -> None:
        assert Version("1.10") > Version("1.9")
        assert Version("1.2") < Version("1.2.1")

    def test_trailing_zeros_are_equal(self) -> None:
        assert Version("1.2") == Version("1.2.0")
        assert hash(Version("1.2")) == hash(Version("1.2.0"))

    def test_letters_sort_before_numbers(self) -> None:
        assert Version("1.0.a1") < Version("1.0")
        assert Version("1.0.alpha") < Version("1.0.beta")

    def test_compare_with_string(self) -> None:
        assert Version("1.2") == "1.2.0"
        assert Version("1.2") < "1.3"

    def test_str_strips_whitespace(self) -> None:
        assert str(Version(" 1.0 ")) == "1.0"


class TestBump:
    """Upper bound of the pessimistic operator."""

    @pytest.mark.parametrize(
        "version, bumped",
        [("5.3.1", "5.4"), ("5.3", "6"), ("5", "6"), ("1.2.3.4", "1.2.4"), ("2.0.beta", "3")],
    )
    def test_bump(self, version: str, bumped: str) -> None:
        assert Version(version).bump() == Version(bumped)

    def test_bump_without_numbers(self) -> None:
        with pytest.raises(InvalidVersionError):
            Version("beta").bump()


class TestSortVersions:
    """sort_versions orders and filters."""

    def test_newest_first(self) -> None:
        assert sort_versions(["1.0", "1.10", "1.9"]) == ["1.10", "1.9", "1.0"]

    def test_oldest_first(self) -> None:
        assert sort_versions(["1.10", "1.0", "1.9"], newest_first=False) == ["1.0", "1.9", "1.10"]

    def test_drops_non_versions(self) -> None:
        assert sort_versions(["1.0", "junk-1", "..", "2.0"]) == ["2.0", "1.0"]
