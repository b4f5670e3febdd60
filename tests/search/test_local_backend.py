"""Tests for the local filesystem repository backend."""

from __future__ import annotations

import pathlib

from artifactns.core.coordinate import ArtifactCoordinate
from artifactns.search.base import BackendType
from artifactns.search.local import LocalBackend, LocalRepository, artifact_path


def test_artifact_path() -> None:
    assert artifact_path("org.example", "lib") == "org/example/lib"


class TestLocalRepository:
    """Version directories of an artifact."""

    def test_versions_newest_first(self, local_repo: pathlib.Path) -> None:
        assert LocalRepository(local_repo).list_versions("org.example", "lib") == ["1.10", "1.9", "1.0"]

    def test_non_version_directories_ignored(self, local_repo: pathlib.Path) -> None:
        (local_repo / "org" / "example" / "lib" / "2.0-SNAPSHOT").mkdir()
        assert LocalRepository(local_repo).list_versions("org.example", "lib") == ["1.10", "1.9", "1.0"]

    def test_missing_artifact(self, local_repo: pathlib.Path) -> None:
        assert LocalRepository(local_repo).list_versions("org.example", "other") == []

    def test_missing_repository(self, tmp_path: pathlib.Path) -> None:
        assert LocalRepository(tmp_path / "nowhere").list_versions("g", "a") == []

    def test_expands_user(self) -> None:
        assert "~" not in str(LocalRepository("~/repo").root)


class TestLocalBackend:
    """Backend contract."""

    def test_list_versions(self, local_repo: pathlib.Path) -> None:
        backend = LocalBackend(LocalRepository(local_repo))
        coord = ArtifactCoordinate.parse("org.example:lib:jar:>1")
        assert backend.list_versions(coord) == ["1.10", "1.9", "1.0"]

    def test_type_and_origin(self, local_repo: pathlib.Path) -> None:
        backend = LocalBackend(LocalRepository(local_repo))
        assert backend.backend_type is BackendType.LOCAL
        assert backend.origin == str(local_repo)
        assert backend.filter_tags() == {"all", "local", str(local_repo)}
