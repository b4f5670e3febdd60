"""Local filesystem repository backend.

A local repository stores each artifact under
``<root>/<group as path>/<id>/<version>/``, so listing the artifact
directory yields its locally available versions.
"""

from __future__ import annotations

import logging
from pathlib import Path

from artifactns.core.coordinate import ArtifactCoordinate
from artifactns.core.requirement import sort_versions
from artifactns.search.base import BackendType, SearchBackend

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_REPOSITORY: Path = Path("~/.m2/repository")


def artifact_path(group: str, art_id: str) -> str:
    """Relative repository path of an artifact: ``org/example/lib``."""
    return "/".join([*group.split("."), art_id])


class LocalRepository:
    """A repository directory on the local filesystem."""

    def __init__(self, root: Path | str = DEFAULT_LOCAL_REPOSITORY) -> None:
        self.root = Path(root).expanduser()

    def list_versions(self, group: str, art_id: str) -> list[str]:
        """Version directories of ``group:id``, newest first."""
        directory = self.root / artifact_path(group, art_id)
        try:
            names = [p.name for p in directory.iterdir() if p.is_dir()]
        except FileNotFoundError:
            return []
        except OSError as exc:
            logger.warning("Cannot list %s: %s", directory, exc)
            return []
        return sort_versions(names)


class LocalBackend(SearchBackend):
    """Search backend over a ``LocalRepository``."""

    def __init__(self, repository: LocalRepository) -> None:
        self._repository = repository

    @property
    def backend_type(self) -> BackendType:
        return BackendType.LOCAL

    @property
    def origin(self) -> str | None:
        return str(self._repository.root)

    def list_versions(self, coordinate: ArtifactCoordinate) -> list[str]:
        return self._repository.list_versions(coordinate.group or "", coordinate.id or "")
