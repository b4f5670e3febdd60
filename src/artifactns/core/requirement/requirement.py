"""Immutable version requirement trees.

A requirement is a boolean expression over comparator terms::

    >1.2 <1.3 !(>=1.2.5 & <=1.2.6)      # implicit AND, negated group
    1.0 | ~>1.0                         # OR binds weaker than AND

Each ``VersionRequirement`` node holds an operator, a tuple of operands
(``Comparison`` leaves or nested nodes) and a ``negative`` flag applied to
the node's result. Nodes never change after construction: ``&``, ``|``
and ``negate()`` build new nodes, appending operands into a node of the
same operator instead of nesting when neither side is negated.
"""

from __future__ import annotations

import operator as _op
import re
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from artifactns.core.requirement.version import Version, is_version
from artifactns.exceptions import InvalidVersionError

COMPARATORS: dict[str, Callable[[Version, Version], bool]] = {
    "=": _op.eq,
    "!=": _op.ne,
    ">": _op.gt,
    "<": _op.lt,
    ">=": _op.ge,
    "<=": _op.le,
    "~>": lambda v, r: v >= r and v < r.bump(),
}

BOOL_CHARS: str = "|&!"
COMPARATOR_CHARS: str = "=!<>~"

_REQUIREMENT_RE = re.compile(r"[|&!=<>~()]")


class Operator(Enum):
    """Logical connective of a composed requirement."""

    AND = "&"
    OR = "|"


@dataclass(frozen=True)
class Comparison:
    """A single ``comparator version`` term; no comparator means ``=``."""

    comparator: str | None
    version: Version

    def satisfied_by(self, version: Version) -> bool:
        return COMPARATORS[self.comparator or "="](version, self.version)

    def __str__(self) -> str:
        return f"{self.comparator or ''}{self.version}"


Operand = Union[Comparison, "VersionRequirement"]


@dataclass(frozen=True)
class VersionRequirement:
    """A parsed, composable version requirement.

    Attributes:
        op: Connective joining ``requirements``; ``None`` for a single term.
        requirements: Operands of this node.
        negative: Invert the node's result.
    """

    op: Operator | None = None
    requirements: tuple[Operand, ...] = ()
    negative: bool = False

    # -- construction -------------------------------------------------------

    @classmethod
    def create(cls, text: str | VersionRequirement) -> VersionRequirement:
        """Parse a requirement string.

        Raises:
            ParseError: If the string is malformed.
        """
        if isinstance(text, VersionRequirement):
            return text
        from artifactns.core.requirement.parser import parse_requirement

        return parse_requirement(text)

    @classmethod
    def term(cls, comparator: str | None, version: str | Version) -> VersionRequirement:
        """Build a single-term requirement."""
        return cls(None, (Comparison(comparator, Version.coerce(version)),))

    @staticmethod
    def is_version(value: object) -> bool:
        """Is *value* a plain version string?"""
        return is_version(value)

    @staticmethod
    def is_requirement(value: object) -> bool:
        """Does *value* contain comparator, boolean or grouping characters?"""
        return isinstance(value, str) and bool(_REQUIREMENT_RE.search(value))

    # -- queries ------------------------------------------------------------

    @property
    def composed(self) -> bool:
        """True if this node aggregates more than one operand."""
        return len(self.requirements) > 1

    @property
    def pinned(self) -> str | None:
        """The version of a lone, non-negated ``=`` term; ``None`` otherwise."""
        if self.negative or self.composed or not self.requirements:
            return None
        req = self.requirements[0]
        if isinstance(req, Comparison):
            return str(req.version) if req.comparator in (None, "=") else None
        return req.pinned

    @property
    def default(self) -> str | None:
        """Version of the rightmost non-negated ``=`` term, if any."""
        if self.negative:
            return None
        for req in reversed(self.requirements):
            if isinstance(req, Comparison):
                if req.comparator in (None, "="):
                    return str(req.version)
            else:
                found = req.default
                if found is not None:
                    return found
        return None

    def satisfied_by(self, version: Version | str | None) -> bool:
        """Test whether *version* meets this requirement.

        Raises:
            InvalidVersionError: If *version* is not a version string.
        """
        if version is None:
            return False
        if not isinstance(version, (Version, str)):
            raise InvalidVersionError(f"Invalid version: {version!r}")
        version = Version.coerce(version)
        check = any if self.op is Operator.OR else all
        result = check(req.satisfied_by(version) for req in self.requirements)
        return not result if self.negative else result

    # -- composition --------------------------------------------------------

    def negate(self) -> VersionRequirement:
        """Return the logical negation of this requirement."""
        return replace(self, negative=not self.negative)

    def _operands(self, op: Operator) -> tuple[Operand, ...]:
        if not self.negative and (self.op is op or len(self.requirements) == 1):
            return self.requirements
        return (self,)

    def _combine(self, op: Operator, other: VersionRequirement | str) -> VersionRequirement:
        other = VersionRequirement.create(other)
        return VersionRequirement(op, self._operands(op) + other._operands(op))

    def __or__(self, other: VersionRequirement | str) -> VersionRequirement:
        return self._combine(Operator.OR, other)

    def __and__(self, other: VersionRequirement | str) -> VersionRequirement:
        return self._combine(Operator.AND, other)

    def __invert__(self) -> VersionRequirement:
        return self.negate()

    def __str__(self) -> str:
        joiner = f" {(self.op or Operator.AND).value} "
        text = joiner.join(str(r) for r in self.requirements)
        if self.negative or len(self.requirements) > 1:
            text = f"( {text} )"
        if self.negative:
            text = "!" + text
        return text
