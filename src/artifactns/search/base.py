"""Base class for best-version search backends.

Every backend answers one question: which versions of a given artifact
does this source know about? ``ArtifactSearch`` consults backends in
order and gates each one through include/exclude filters keyed by the
backend type, its origin, or ``all``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from artifactns.core.coordinate import ArtifactCoordinate

ALL: str = "all"


class BackendType(Enum):
    """Kinds of version sources, in their default search order."""

    RUNTIME = "runtime"
    LOCAL = "local"
    REMOTE = "remote"
    SCRAPER = "mvnrepository"


class SearchBackend(ABC):
    """Abstract source of candidate versions.

    Subclasses implement ``backend_type`` and ``list_versions``; backends
    bound to a specific location also override ``origin``.
    """

    @property
    @abstractmethod
    def backend_type(self) -> BackendType:
        """The kind of source this backend queries."""

    @property
    def origin(self) -> str | None:
        """Identifier of the concrete source (URL, path), if any."""
        return None

    @abstractmethod
    def list_versions(self, coordinate: ArtifactCoordinate) -> list[str]:
        """Return candidate versions for *coordinate*, newest first.

        The coordinate's version is ignored. Sources that are missing or
        unreachable yield an empty list.
        """

    def filter_tags(self) -> set[str]:
        """Names an include/exclude filter may use to match this backend."""
        tags = {ALL, self.backend_type.value}
        if self.origin:
            tags.add(self.origin)
        return tags

    def __repr__(self) -> str:
        origin = f" {self.origin}" if self.origin else ""
        return f"<{type(self).__name__} {self.backend_type.value}{origin}>"
