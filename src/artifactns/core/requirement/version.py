"""Structured version values and their ordering.

Versions are dotted strings of word characters (``1.2.15``, ``2.5.6.SEC01``,
``1.0.beta2``). For ordering a version is split into segments, each a run
of digits or a run of letters:

- numeric segments compare numerically;
- alphabetic segments compare lexically and sort *before* any numeric
  segment, so ``1.0.a1 < 1.0``;
- missing trailing segments count as ``0``, so ``1.2 == 1.2.0`` and
  ``1.2 < 1.2.1``.
"""

from __future__ import annotations

import re
from functools import total_ordering

from artifactns.exceptions import InvalidVersionError

VERSION_CHARS: str = "A-Za-z0-9_."

_VERSION_RE = re.compile(rf"^[ \t]*[{VERSION_CHARS}]*[A-Za-z0-9][{VERSION_CHARS}]*[ \t]*\Z")
_SEGMENT_RE = re.compile(r"[0-9]+|[A-Za-z]+")

Segment = int | str


def is_version(value: object) -> bool:
    """Return True if *value* is syntactically a version string."""
    return isinstance(value, str) and bool(_VERSION_RE.match(value))


def _segments(text: str) -> tuple[Segment, ...]:
    return tuple(int(s) if s.isdigit() else s for s in _SEGMENT_RE.findall(text))


def _compare_segment(left: Segment, right: Segment) -> int:
    if isinstance(left, int) and isinstance(right, int):
        return (left > right) - (left < right)
    if isinstance(left, str) and isinstance(right, str):
        return (left > right) - (left < right)
    # Letters mark pre-releases and sort below numbers.
    return -1 if isinstance(left, str) else 1


@total_ordering
class Version:
    """A parsed, comparable version.

    Raises:
        InvalidVersionError: If the string is not a version.
    """

    __slots__ = ("text", "segments")

    def __init__(self, text: str) -> None:
        if not is_version(text):
            raise InvalidVersionError(f"Invalid version: {text!r}")
        self.text: str = text.strip()
        self.segments: tuple[Segment, ...] = _segments(self.text)

    @classmethod
    def coerce(cls, value: Version | str) -> Version:
        """Return *value* as a ``Version``, parsing strings."""
        return value if isinstance(value, Version) else cls(value)

    def compare(self, other: Version) -> int:
        """Three-way comparison: negative, zero or positive."""
        length = max(len(self.segments), len(other.segments))
        for i in range(length):
            left = self.segments[i] if i < len(self.segments) else 0
            right = other.segments[i] if i < len(other.segments) else 0
            result = _compare_segment(left, right)
            if result:
                return result
        return 0

    def bump(self) -> Version:
        """Next most-significant release, the upper bound of ``~>``.

        Trailing alphabetic segments are dropped, then the last segment is
        dropped (unless it is the only one) and the new last one is
        incremented: ``5.3.1 -> 5.4``, ``5.3 -> 6``, ``5 -> 6``.
        """
        segments = list(self.segments)
        while segments and isinstance(segments[-1], str):
            segments.pop()
        if len(segments) > 1:
            segments.pop()
        while segments and isinstance(segments[-1], str):
            segments.pop()
        if not segments:
            raise InvalidVersionError(f"Cannot bump version {self.text!r}")
        segments[-1] = int(segments[-1]) + 1
        return Version(".".join(str(s) for s in segments))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str) and is_version(other):
            other = Version(other)
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: Version | str) -> bool:
        return self.compare(Version.coerce(other)) < 0

    def __hash__(self) -> int:
        segments = list(self.segments)
        while segments and segments[-1] == 0:
            segments.pop()
        return hash(tuple(segments))

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Version({self.text!r})"


def version_key(value: str) -> Version:
    """Sort key for version strings."""
    return Version(value)


def sort_versions(values: list[str], *, newest_first: bool = True) -> list[str]:
    """Sort version strings, dropping anything that is not a version."""
    valid = [v.strip() for v in values if is_version(v)]
    return sorted(valid, key=version_key, reverse=newest_first)
