"""Shared fixtures for artifactns tests."""

from __future__ import annotations

import pathlib

import pytest

from artifactns.config import ENV_LOCAL_REPO, ENV_REMOTE_REPOS, ENV_SETTINGS, ENV_TIMEOUT
from artifactns.core.coordinate import ArtifactCoordinate
from artifactns.core.namespace import NamespaceRegistry, reset
from artifactns.search import ArtifactSearch, BackendType, SearchBackend


class StaticBackend(SearchBackend):
    """Backend answering from a fixed version list and recording each query."""

    def __init__(
        self,
        versions: list[str],
        backend_type: BackendType = BackendType.REMOTE,
        origin: str | None = None,
    ) -> None:
        self._versions = list(versions)
        self._type = backend_type
        self._origin = origin
        self.calls: list[ArtifactCoordinate] = []

    @property
    def backend_type(self) -> BackendType:
        return self._type

    @property
    def origin(self) -> str | None:
        return self._origin

    def list_versions(self, coordinate: ArtifactCoordinate) -> list[str]:
        self.calls.append(coordinate)
        return list(self._versions)


@pytest.fixture
def static_backend() -> type[StaticBackend]:
    """Factory for in-memory search backends."""
    return StaticBackend


@pytest.fixture
def registry() -> NamespaceRegistry:
    """A registry whose search never leaves the process."""
    return NamespaceRegistry(search=ArtifactSearch([]))


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: pathlib.Path) -> None:
    """Keep user settings and the default registry out of every test."""
    for name in (ENV_SETTINGS, ENV_LOCAL_REPO, ENV_REMOTE_REPOS, ENV_TIMEOUT):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    reset()


@pytest.fixture
def local_repo(tmp_path: pathlib.Path) -> pathlib.Path:
    """A local repository holding ``org.example:lib`` 1.0, 1.9 and 1.10."""
    root = tmp_path / "repository"
    for version in ("1.0", "1.9", "1.10"):
        (root / "org" / "example" / "lib" / version).mkdir(parents=True)
    (root / "org" / "example" / "lib" / "maven-metadata-local.xml").write_text("<metadata/>")
    return root
