"""Remote repository backend.

Versions are read from the artifact's ``maven-metadata.xml``. When the
metadata resource does not exist, the HTTP directory listing at the same
path is parsed instead. When neither exists the repository simply has no
candidates for the artifact. Repositories whose base is a ``file:`` URI or
a plain path are read from disk and have no listing.

Usage::

    repo = RemoteRepository("https://repo1.maven.org/maven2")
    repo.fetch_metadata("log4j", "log4j")   # ['1.2.17', '1.2.16', ...]
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from html.parser import HTMLParser
from pathlib import Path
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

from artifactns.core.coordinate import ArtifactCoordinate
from artifactns.core.requirement import sort_versions
from artifactns.exceptions import ResourceNotFoundError
from artifactns.search.base import BackendType, SearchBackend
from artifactns.search.http_client import DEFAULT_TIMEOUT, fetch_text
from artifactns.search.local import artifact_path

logger = logging.getLogger(__name__)

DEFAULT_REMOTE_REPOSITORY: str = "https://repo1.maven.org/maven2"


# ---------------------------------------------------------------------------
# Response parsers
# ---------------------------------------------------------------------------


def parse_metadata(xml_text: str) -> list[str]:
    """Extract ``versioning/versions/version`` entries, newest first.

    Metadata lists versions oldest first, so the document order is reversed.
    """
    if not xml_text.strip():
        return []
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        logger.warning("Malformed repository metadata: %s", exc)
        return []
    versions = [
        elem.text.strip()
        for elem in root.findall("versioning/versions/version")
        if elem.text and elem.text.strip()
    ]
    return list(reversed(versions))


class _ListingParser(HTMLParser):
    """Collect the text of anchors that point at sub-directories."""

    def __init__(self) -> None:
        super().__init__()
        self.entries: list[str] = []
        self._in_anchor = False
        self._text: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag == "a" and any(name == "href" for name, _ in attrs):
            self._in_anchor = True
            self._text = []

    def handle_data(self, data: str) -> None:
        if self._in_anchor:
            self._text.append(data)

    def handle_endtag(self, tag: str) -> None:
        if tag == "a" and self._in_anchor:
            self._in_anchor = False
            text = "".join(self._text).strip()
            if text.endswith("/"):
                self.entries.append(text[:-1])


def parse_listing(html: str) -> list[str]:
    """Extract sub-directory names from an HTML index page, newest first."""
    parser = _ListingParser()
    parser.feed(html)
    parser.close()
    return sort_versions(parser.entries)


# ---------------------------------------------------------------------------
# Repository client and backend
# ---------------------------------------------------------------------------


def _local_path(url: str) -> Path:
    """Filesystem path for a ``file:`` URI or a plain path."""
    parsed = urlparse(url)
    if parsed.scheme == "file":
        return Path(url2pathname(unquote(parsed.path)))
    return Path(url).expanduser()


class RemoteRepository:
    """A repository addressed by an HTTP(S) URL, a ``file:`` URI or a path."""

    def __init__(self, base_url: str = DEFAULT_REMOTE_REPOSITORY, *, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def supports_listing(self) -> bool:
        """Directory listings are only meaningful over HTTP(S)."""
        return self.base_url.startswith(("http://", "https://"))

    def metadata_url(self, group: str, art_id: str) -> str:
        return f"{self.base_url}/{artifact_path(group, art_id)}/maven-metadata.xml"

    def listing_url(self, group: str, art_id: str) -> str:
        return f"{self.base_url}/{artifact_path(group, art_id)}/"

    def fetch_metadata(self, group: str, art_id: str) -> list[str]:
        """Versions from the metadata resource, newest first.

        Raises:
            ResourceNotFoundError: If the metadata resource does not exist.
        """
        return parse_metadata(self._read(self.metadata_url(group, art_id)))

    def fetch_listing(self, group: str, art_id: str) -> list[str]:
        """Versions from the directory listing, newest first.

        Raises:
            ResourceNotFoundError: If there is no listing for the artifact.
        """
        if not self.supports_listing:
            raise ResourceNotFoundError(f"{self.base_url} does not provide directory listings")
        return parse_listing(self._read(self.listing_url(group, art_id)))

    def _read(self, url: str) -> str:
        if self.supports_listing:
            return fetch_text(url, timeout=self.timeout)
        path = _local_path(url)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ResourceNotFoundError(f"{path} not found") from exc
        except OSError as exc:
            logger.warning("Cannot read %s: %s", path, exc)
            return ""


class RemoteBackend(SearchBackend):
    """Search backend over one ``RemoteRepository``."""

    def __init__(self, repository: RemoteRepository, *, fallback: bool = True) -> None:
        self._repository = repository
        self._fallback = fallback

    @property
    def backend_type(self) -> BackendType:
        return BackendType.REMOTE

    @property
    def origin(self) -> str | None:
        return self._repository.base_url

    def list_versions(self, coordinate: ArtifactCoordinate) -> list[str]:
        group, art_id = coordinate.group or "", coordinate.id or ""
        try:
            return self._repository.fetch_metadata(group, art_id)
        except ResourceNotFoundError as exc:
            logger.debug("No metadata for %s:%s: %s", group, art_id, exc)
        if not self._fallback:
            return []
        try:
            return self._repository.fetch_listing(group, art_id)
        except ResourceNotFoundError as exc:
            logger.debug("No listing for %s:%s: %s", group, art_id, exc)
            return []
