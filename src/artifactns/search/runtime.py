"""In-memory catalog of artifacts already known to the process.

Namespaces add every artifact they materialise and the search records
every version it resolves, so later searches for the same artifact can
be answered without touching the filesystem or the network.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator

from artifactns.core.coordinate import ArtifactCoordinate
from artifactns.core.requirement import sort_versions
from artifactns.search.base import BackendType, SearchBackend


class ArtifactCatalog:
    """Thread-safe set of concrete artifact coordinates."""

    def __init__(self, artifacts: list[ArtifactCoordinate | str] | None = None) -> None:
        self._lock = threading.Lock()
        self._artifacts: dict[str, ArtifactCoordinate] = {}
        for artifact in artifacts or []:
            self.add(artifact)

    def add(self, artifact: ArtifactCoordinate | str) -> None:
        """Record a concrete artifact; strings are parsed as coordinates."""
        if isinstance(artifact, str):
            artifact = ArtifactCoordinate.parse(artifact)
        with self._lock:
            self._artifacts[artifact.to_string()] = artifact

    def known_versions(self, group: str, art_id: str, art_type: str) -> list[str]:
        """Versions of ``group:id:type`` in the catalog, newest first."""
        with self._lock:
            versions = [
                a.version or ""
                for a in self._artifacts.values()
                if (a.group, a.id, a.type) == (group, art_id, art_type)
            ]
        return sort_versions(versions)

    def clear(self) -> None:
        with self._lock:
            self._artifacts.clear()

    def __contains__(self, artifact: object) -> bool:
        if isinstance(artifact, ArtifactCoordinate):
            artifact = artifact.to_string()
        with self._lock:
            return artifact in self._artifacts

    def __iter__(self) -> Iterator[ArtifactCoordinate]:
        with self._lock:
            return iter(list(self._artifacts.values()))

    def __len__(self) -> int:
        with self._lock:
            return len(self._artifacts)


class RuntimeBackend(SearchBackend):
    """Search backend answering from an ``ArtifactCatalog``."""

    def __init__(self, catalog: ArtifactCatalog) -> None:
        self._catalog = catalog

    @property
    def backend_type(self) -> BackendType:
        return BackendType.RUNTIME

    def list_versions(self, coordinate: ArtifactCoordinate) -> list[str]:
        return self._catalog.known_versions(
            coordinate.group or "", coordinate.id or "", coordinate.type
        )
