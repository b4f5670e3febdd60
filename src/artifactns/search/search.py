"""Best-version resolution across ordered search backends.

``ArtifactSearch.best_version`` turns a coordinate whose version slot is a
requirement (``"org.example:lib:jar:>=1.2 <2"``) into a concrete
coordinate:

1. A pinned requirement (``"1.2"`` or ``"=1.2"``) is returned as is,
   without consulting any backend.
2. Otherwise backends are consulted in order; each returns candidates
   newest first and the first candidate satisfying the requirement wins.
   Later backends are never consulted once one has produced a match.
3. With no match, the requirement's default (its rightmost ``=`` term)
   is used.
4. With no default either, ``ArtifactNotFoundError`` is raised.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from artifactns.core.coordinate import ArtifactCoordinate, normalize_spec
from artifactns.core.requirement import VersionRequirement, is_version
from artifactns.exceptions import ArtifactNotFoundError, ParseError
from artifactns.search.base import SearchBackend
from artifactns.search.runtime import ArtifactCatalog

logger = logging.getLogger(__name__)


class ArtifactSearch:
    """Search an ordered list of backends for the best matching version.

    Args:
        backends: Backends in the order they are consulted.
        include: Backend types or origins allowed to run (empty means all).
        exclude: Backend types or origins never to run.
        catalog: If given, every resolved coordinate is recorded in it.
    """

    def __init__(
        self,
        backends: Sequence[SearchBackend] = (),
        *,
        include: Sequence[str] = (),
        exclude: Sequence[str] = (),
        catalog: ArtifactCatalog | None = None,
    ) -> None:
        self._backends = list(backends)
        self._include: list[str] = list(include)
        self._exclude: list[str] = list(exclude)
        self._catalog = catalog

    @property
    def backends(self) -> tuple[SearchBackend, ...]:
        return tuple(self._backends)

    def include(self, *names: str) -> list[str]:
        """Add names to the include filter and return the filter."""
        self._include.extend(names)
        return list(self._include)

    def exclude(self, *names: str) -> list[str]:
        """Add names to the exclude filter and return the filter."""
        self._exclude.extend(names)
        return list(self._exclude)

    def should_consult(self, backend: SearchBackend) -> bool:
        """Apply the include/exclude filters to *backend*."""
        tags = backend.filter_tags()
        included = not self._include or bool(tags & set(self._include))
        return included and not tags & set(self._exclude)

    @staticmethod
    def is_requirement(spec: Any) -> bool:
        """Does the version slot of *spec* hold a requirement expression?"""
        _, coordinate = normalize_spec(spec)
        return coordinate is not None and VersionRequirement.is_requirement(coordinate.version)

    def best_version(self, spec: Any) -> ArtifactCoordinate:
        """Resolve the requirement in *spec*'s version slot to a version.

        Args:
            spec: Coordinate string, attribute mapping or ``ArtifactCoordinate``.

        Returns:
            The coordinate with a concrete version.

        Raises:
            ParseError: If *spec* or its requirement is malformed.
            ArtifactNotFoundError: If nothing satisfies the requirement.
        """
        _, coordinate = normalize_spec(spec)
        if coordinate is None or not coordinate.version:
            raise ParseError(f"Cannot search for {spec!r}: no version requirement given")
        requirement = VersionRequirement.create(coordinate.version)

        result = requirement.pinned
        if result is None:
            result = self._search(coordinate, requirement)
        if result is None:
            result = requirement.default
        if result is None:
            raise ArtifactNotFoundError(
                f"Could not find {coordinate}\n"
                " You may need to use a specific version instead of a requirement"
            )
        resolved = coordinate.with_version(result)
        if self._catalog is not None:
            self._catalog.add(resolved)
        return resolved

    def _search(self, coordinate: ArtifactCoordinate, requirement: VersionRequirement) -> str | None:
        for backend in self._backends:
            if not self.should_consult(backend):
                logger.debug("Skipping %r for %s", backend, coordinate)
                continue
            found = self._select(requirement, backend.list_versions(coordinate))
            if found is not None:
                logger.info("Resolved %s to %s via %r", coordinate, found, backend)
                return found
        return None

    @staticmethod
    def _select(requirement: VersionRequirement, candidates: Sequence[str]) -> str | None:
        for candidate in candidates:
            if not is_version(candidate):
                logger.debug("Ignoring non-version candidate %r", candidate)
                continue
            if requirement.satisfied_by(candidate):
                return candidate.strip()
        return None
