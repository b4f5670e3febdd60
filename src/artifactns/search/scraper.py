"""Last-resort backend scraping the mvnrepository.com artifact page.

The artifact page renders every published version as a link inside a
``table.grid``; links are listed newest first.
"""

from __future__ import annotations

import logging
from html.parser import HTMLParser

from artifactns.core.coordinate import ArtifactCoordinate
from artifactns.core.requirement import is_version
from artifactns.exceptions import ResourceNotFoundError
from artifactns.search.base import BackendType, SearchBackend
from artifactns.search.http_client import DEFAULT_TIMEOUT, fetch_text

logger = logging.getLogger(__name__)

MVNREPOSITORY_URL: str = "https://mvnrepository.com/artifact"


class _GridParser(HTMLParser):
    """Collect link texts found inside ``<table class="grid ...">``."""

    def __init__(self) -> None:
        super().__init__()
        self.versions: list[str] = []
        self._table_depth = 0
        self._in_anchor = False
        self._text: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag == "table":
            classes = (dict(attrs).get("class") or "").split()
            if self._table_depth or "grid" in classes:
                self._table_depth += 1
        elif tag == "a" and self._table_depth:
            self._in_anchor = True
            self._text = []

    def handle_data(self, data: str) -> None:
        if self._in_anchor:
            self._text.append(data)

    def handle_endtag(self, tag: str) -> None:
        if tag == "table" and self._table_depth:
            self._table_depth -= 1
        elif tag == "a" and self._in_anchor:
            self._in_anchor = False
            text = "".join(self._text).strip()
            if is_version(text) and any(ch.isdigit() for ch in text) and text not in self.versions:
                self.versions.append(text)


def parse_artifact_page(html: str) -> list[str]:
    """Versions listed on an artifact page, in page order."""
    parser = _GridParser()
    parser.feed(html)
    parser.close()
    return parser.versions


class MvnRepositoryScraper:
    """Client for mvnrepository.com artifact pages."""

    def __init__(self, base_url: str = MVNREPOSITORY_URL, *, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def page_url(self, group: str, art_id: str) -> str:
        return f"{self.base_url}/{group}/{art_id}"

    def fetch_versions(self, group: str, art_id: str) -> list[str]:
        """Versions listed for ``group:id``.

        Raises:
            ResourceNotFoundError: If the site has no page for the artifact.
        """
        return parse_artifact_page(fetch_text(self.page_url(group, art_id), timeout=self.timeout))


class ScraperBackend(SearchBackend):
    """Search backend over ``MvnRepositoryScraper``."""

    def __init__(self, scraper: MvnRepositoryScraper | None = None) -> None:
        self._scraper = scraper or MvnRepositoryScraper()

    @property
    def backend_type(self) -> BackendType:
        return BackendType.SCRAPER

    def list_versions(self, coordinate: ArtifactCoordinate) -> list[str]:
        try:
            return self._scraper.fetch_versions(coordinate.group or "", coordinate.id or "")
        except ResourceNotFoundError as exc:
            logger.info("mvnrepository has no page for %s:%s: %s", coordinate.group, coordinate.id, exc)
            return []
