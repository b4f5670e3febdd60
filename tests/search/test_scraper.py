"""Tests for the mvnrepository.com scraper backend."""

from __future__ import annotations

from unittest.mock import patch

from artifactns.core.coordinate import ArtifactCoordinate
from artifactns.exceptions import ResourceNotFoundError
from artifactns.search.base import BackendType
from artifactns.search.scraper import MvnRepositoryScraper, ScraperBackend, parse_artifact_page

PAGE = """\
<html><body>
<div class="header"><a href="/about">About</a> <a href="/v/9.9">9.9</a></div>
<table class="grid versions">
  <thead><tr><th>Version</th><th>Repository</th></tr></thead>
  <tbody>
    <tr><td><a href="spring-core/5.3.1">5.3.1</a></td><td><a href="/repos/central">Central</a></td></tr>
    <tr><td><a href="spring-core/5.3.0">5.3.0</a></td><td><a href="/repos/central">Central</a></td></tr>
    <tr><td><a href="spring-core/5.2.9.RELEASE">5.2.9.RELEASE</a></td><td></td></tr>
  </tbody>
</table>
<a href="/v/0.1">0.1</a>
</body></html>
"""

SPRING = ArtifactCoordinate.parse("org.springframework:spring-core:jar:>5")


class TestParseArtifactPage:
    """Only version links inside the grid table count."""

    def test_versions_in_page_order(self) -> None:
        assert parse_artifact_page(PAGE) == ["5.3.1", "5.3.0", "5.2.9.RELEASE"]

    def test_no_grid(self) -> None:
        assert parse_artifact_page("<html><a href='x'>1.0</a></html>") == []


class TestScraperBackend:
    """Backend contract."""

    def test_page_url(self) -> None:
        scraper = MvnRepositoryScraper("https://mvn.example/artifact/")
        assert scraper.page_url("org.springframework", "spring-core") == (
            "https://mvn.example/artifact/org.springframework/spring-core"
        )

    @patch("artifactns.search.scraper.fetch_text", return_value=PAGE)
    def test_list_versions(self, mock_fetch) -> None:
        backend = ScraperBackend(MvnRepositoryScraper(timeout=3.0))
        assert backend.list_versions(SPRING)[0] == "5.3.1"
        mock_fetch.assert_called_once_with(
            "https://mvnrepository.com/artifact/org.springframework/spring-core", timeout=3.0
        )

    @patch("artifactns.search.scraper.fetch_text", side_effect=ResourceNotFoundError("404"))
    def test_missing_page(self, mock_fetch) -> None:
        assert ScraperBackend().list_versions(SPRING) == []

    def test_type(self) -> None:
        backend = ScraperBackend()
        assert backend.backend_type is BackendType.SCRAPER
        assert backend.filter_tags() == {"all", "mvnrepository"}
