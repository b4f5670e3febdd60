"""Best-version search over runtime, local, remote and scraped sources.

Public API::

    from artifactns.search import ArtifactSearch, SearchBackend, BackendType
    from artifactns.search.runtime import ArtifactCatalog, RuntimeBackend
    from artifactns.search.local import LocalRepository, LocalBackend
    from artifactns.search.remote import RemoteRepository, RemoteBackend
    from artifactns.search.scraper import MvnRepositoryScraper, ScraperBackend
"""

from __future__ import annotations

from artifactns.search.base import ALL, BackendType, SearchBackend
from artifactns.search.runtime import ArtifactCatalog
from artifactns.search.search import ArtifactSearch

__all__ = [
    "ALL",
    "ArtifactCatalog",
    "ArtifactSearch",
    "BackendType",
    "SearchBackend",
]
