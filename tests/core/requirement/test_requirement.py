"""Tests for VersionRequirement evaluation, composition and rendering."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from artifactns.core.requirement import Operator, VersionRequirement
from artifactns.exceptions import InvalidVersionError

create = VersionRequirement.create


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


class TestSatisfiedBy:
    """Comparator semantics."""

    @pytest.mark.parametrize(
        "version, expected",
        [("5.3.1", True), ("5.3.9", True), ("5.4.0", False), ("5.3.0", False), ("6", False)],
    )
    def test_pessimistic_patch(self, version: str, expected: bool) -> None:
        assert create("~>5.3.1").satisfied_by(version) is expected

    @pytest.mark.parametrize(
        "version, expected",
        [("5.3", True), ("5.9", True), ("6.0", False), ("5.2", False)],
    )
    def test_pessimistic_minor(self, version: str, expected: bool) -> None:
        assert create("~>5.3").satisfied_by(version) is expected

    @pytest.mark.parametrize(
        "version, expected",
        [("1.2.4", True), ("1.2.5", False), ("1.2.6", False), ("1.2.7", True),
         ("1.1", False), ("1.2", False), ("1.3", False)],
    )
    def test_range_with_excluded_window(self, version: str, expected: bool) -> None:
        req = create(">1.2 <1.3 !(>=1.2.5 & <=1.2.6)")
        assert req.satisfied_by(version) is expected

    def test_negated_tautology_rejects_everything(self) -> None:
        """Every version is >=1.2.5 or <=1.2.6, so negating that excludes all."""
        req = create(">1.2 <1.3 !(>=1.2.5 | <=1.2.6)")
        for version in ("1.2.1", "1.2.5", "1.2.7", "1.2.9"):
            assert not req.satisfied_by(version)

    def test_bare_version_means_equal(self) -> None:
        assert create("1").satisfied_by("1.0")
        assert create("=1.2").satisfied_by("1.2.0")
        assert not create("1.2").satisfied_by("1.2.1")

    def test_not_equal(self) -> None:
        assert not create("!=1.0").satisfied_by("1.0")
        assert create("!=1.0").satisfied_by("1.1")

    def test_keyword_connectives(self) -> None:
        req = create(">1 and <3 or 5")
        assert req.satisfied_by("2")
        assert req.satisfied_by("5")
        assert not req.satisfied_by("4")

    def test_not_keyword(self) -> None:
        req = create("not(1.5)")
        assert not req.satisfied_by("1.5")
        assert req.satisfied_by("1.4")

    def test_none_is_never_satisfied(self) -> None:
        assert not create(">0").satisfied_by(None)

    @pytest.mark.parametrize("value", ["1.0-SNAPSHOT", 1, ["1.0"]])
    def test_invalid_version(self, value: object) -> None:
        with pytest.raises(InvalidVersionError):
            create(">0").satisfied_by(value)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class TestQueries:
    """composed, pinned and default."""

    @pytest.mark.parametrize(
        "text, expected",
        [("1", False), (">1", False), ("1 | 2", True), ("1 & 2", True), (">1 <2", True)],
    )
    def test_composed(self, text: str, expected: bool) -> None:
        assert create(text).composed is expected

    @pytest.mark.parametrize(
        "text, expected",
        [("1.2", "1.2"), ("=1.2", "1.2"), ("(1.2)", "1.2"), (">1.2", None),
         ("1 | 2", None), ("!(1.2)", None)],
    )
    def test_pinned(self, text: str, expected: str | None) -> None:
        assert create(text).pinned == expected

    @pytest.mark.parametrize(
        "text, expected",
        [("1 | 2", "2"), ("=1.5", "1.5"), (">1 <2", None), ("1 | !(2)", "1"),
         ("!(1)", None), ("(1 | 2) >0", "2"), ("1.0 | ~>1.0", "1.0")],
    )
    def test_default(self, text: str, expected: str | None) -> None:
        assert create(text).default == expected

    def test_is_requirement(self) -> None:
        assert VersionRequirement.is_requirement(">1")
        assert VersionRequirement.is_requirement("1 | 2")
        assert not VersionRequirement.is_requirement("1.2.15")
        assert not VersionRequirement.is_requirement(None)

    def test_is_version(self) -> None:
        assert VersionRequirement.is_version("1.2.15")
        assert not VersionRequirement.is_version(">1")


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


class TestComposition:
    """&, | and negate build new immutable requirements."""

    def test_or(self) -> None:
        req = create("1") | create("2")
        assert req.composed
        assert req.satisfied_by("1")
        assert req.satisfied_by("2")
        assert not req.satisfied_by("1.5")

    def test_accepts_strings(self) -> None:
        req = create(">1") & "<2"
        assert req.satisfied_by("1.5")
        assert not req.satisfied_by("2")

    def test_same_operator_flattens(self) -> None:
        req = (create("1") | "2") | "3"
        assert req.op is Operator.OR
        assert len(req.requirements) == 3

    def test_negated_operand_is_nested(self) -> None:
        req = create(">1") & create("2").negate()
        assert len(req.requirements) == 2
        nested = req.requirements[1]
        assert isinstance(nested, VersionRequirement) and nested.negative
        assert req.satisfied_by("3")
        assert not req.satisfied_by("2")

    def test_operands_are_not_mutated(self) -> None:
        base = create("1")
        combined = base | "2"
        assert not base.composed
        assert combined.composed

    def test_frozen(self) -> None:
        with pytest.raises(FrozenInstanceError):
            create("1").negative = True  # type: ignore[misc]

    def test_double_negation(self) -> None:
        req = create(">1 <2")
        assert req.negate().negate() == req
        assert ~req == req.negate()

    def test_create_passes_instances_through(self) -> None:
        req = create(">1")
        assert VersionRequirement.create(req) is req

    def test_term(self) -> None:
        assert VersionRequirement.term(">=", "1.2").satisfied_by("1.2")


class TestRendering:
    """str() produces text the parser accepts again."""

    def test_single_term(self) -> None:
        assert str(create(">1.0")) == ">1.0"

    def test_composed_is_parenthesised(self) -> None:
        assert str(create(">1 <2")) == "( >1 & <2 )"

    def test_negation(self) -> None:
        assert str(create("!(1 | 2)")) == "!( 1 | 2 )"

    @pytest.mark.parametrize(
        "text", [">1.2 <1.3 !(>=1.2.5 & <=1.2.6)", "1.0 | ~>1.0", "!=1 (2 | 3)"],
    )
    def test_reparse_is_equivalent(self, text: str) -> None:
        req = create(text)
        again = create(str(req))
        for version in ("1", "1.0.5", "1.2.4", "1.2.5", "1.2.7", "2", "3"):
            assert again.satisfied_by(version) == req.satisfied_by(version)
