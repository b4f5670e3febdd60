"""Search settings: repositories, timeout and backend filters.

Settings come from a YAML file, then environment variables override
individual values::

    # ~/.artifactns/settings.yaml
    repositories:
      local: ~/.m2/repository
      remote:
        - https://repo1.maven.org/maven2
        - https://repo.example.com/releases
    search:
      timeout: 10
      scraper: false
      exclude: [mvnrepository]

Environment overrides:
    ARTIFACTNS_SETTINGS      -- settings file used when no path is given.
    ARTIFACTNS_LOCAL_REPO    -- local repository directory.
    ARTIFACTNS_REMOTE_REPOS  -- comma-separated remote repository URLs.
    ARTIFACTNS_TIMEOUT       -- HTTP timeout in seconds.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from artifactns.exceptions import ConfigError
from artifactns.search import ArtifactCatalog, ArtifactSearch, SearchBackend
from artifactns.search.http_client import DEFAULT_TIMEOUT
from artifactns.search.local import DEFAULT_LOCAL_REPOSITORY, LocalBackend, LocalRepository
from artifactns.search.remote import DEFAULT_REMOTE_REPOSITORY, RemoteBackend, RemoteRepository
from artifactns.search.runtime import RuntimeBackend
from artifactns.search.scraper import MvnRepositoryScraper, ScraperBackend

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE: Path = Path("~/.artifactns/settings.yaml")

ENV_SETTINGS = "ARTIFACTNS_SETTINGS"
ENV_LOCAL_REPO = "ARTIFACTNS_LOCAL_REPO"
ENV_REMOTE_REPOS = "ARTIFACTNS_REMOTE_REPOS"
ENV_TIMEOUT = "ARTIFACTNS_TIMEOUT"


@dataclass
class SearchSettings:
    """Where and how ``ArtifactSearch`` looks for versions.

    Attributes:
        local_repository: Root of the local repository.
        remote_repositories: Remote base URLs, in search order.
        timeout: HTTP timeout in seconds for remote and scraper backends.
        scraper: Whether the mvnrepository.com fallback is enabled.
        include: Backend types or origins allowed to run.
        exclude: Backend types or origins never to run.
    """

    local_repository: Path = DEFAULT_LOCAL_REPOSITORY
    remote_repositories: list[str] = field(default_factory=lambda: [DEFAULT_REMOTE_REPOSITORY])
    timeout: float = DEFAULT_TIMEOUT
    scraper: bool = True
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)


def _as_list(value: Any, name: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(v) for v in value]
    raise ConfigError(f"{name} must be a string or a list, got {value!r}")


def _as_timeout(value: Any, source: str) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid timeout {value!r} in {source}") from exc
    if timeout <= 0:
        raise ConfigError(f"Timeout must be positive, got {timeout} in {source}")
    return timeout


def settings_from_mapping(data: Mapping[str, Any], source: str = "settings") -> SearchSettings:
    """Build settings from the parsed YAML structure."""
    settings = SearchSettings()
    repositories = data.get("repositories") or {}
    search = data.get("search") or {}
    if not isinstance(repositories, Mapping) or not isinstance(search, Mapping):
        raise ConfigError(f"'repositories' and 'search' must be mappings in {source}")

    if repositories.get("local"):
        settings.local_repository = Path(str(repositories["local"]))
    if "remote" in repositories:
        settings.remote_repositories = _as_list(repositories["remote"], "repositories.remote")
    if "timeout" in search:
        settings.timeout = _as_timeout(search["timeout"], source)
    if "scraper" in search:
        settings.scraper = bool(search["scraper"])
    settings.include = _as_list(search.get("include"), "search.include")
    settings.exclude = _as_list(search.get("exclude"), "search.exclude")
    return settings


def apply_env_overrides(settings: SearchSettings, env: Mapping[str, str]) -> SearchSettings:
    """Apply ``ARTIFACTNS_*`` environment overrides in place."""
    if env.get(ENV_LOCAL_REPO):
        settings.local_repository = Path(env[ENV_LOCAL_REPO])
    if env.get(ENV_REMOTE_REPOS):
        settings.remote_repositories = [
            url.strip() for url in env[ENV_REMOTE_REPOS].split(",") if url.strip()
        ]
    if env.get(ENV_TIMEOUT):
        settings.timeout = _as_timeout(env[ENV_TIMEOUT], ENV_TIMEOUT)
    return settings


def load_settings(path: Path | str | None = None, env: Mapping[str, str] | None = None) -> SearchSettings:
    """Load settings from *path* (or the default file) plus environment.

    A missing default file yields default settings; a missing explicit
    file is an error.

    Raises:
        ConfigError: If the file cannot be read or holds invalid values.
    """
    env = os.environ if env is None else env
    explicit = path is not None or bool(env.get(ENV_SETTINGS))
    settings_path = Path(path or env.get(ENV_SETTINGS) or DEFAULT_SETTINGS_FILE).expanduser()

    if settings_path.is_file():
        try:
            data = yaml.safe_load(settings_path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot read settings file {settings_path}: {exc}") from exc
        if not isinstance(data, Mapping):
            raise ConfigError(f"Settings file {settings_path} must contain a mapping")
        settings = settings_from_mapping(data, str(settings_path))
        logger.debug("Loaded settings from %s", settings_path)
    elif explicit:
        raise ConfigError(f"Settings file {settings_path} does not exist")
    else:
        settings = SearchSettings()
    return apply_env_overrides(settings, env)


def build_backends(settings: SearchSettings, catalog: ArtifactCatalog) -> list[SearchBackend]:
    """Backends in search order: runtime, local, each remote, scraper."""
    backends: list[SearchBackend] = [
        RuntimeBackend(catalog),
        LocalBackend(LocalRepository(settings.local_repository)),
    ]
    backends.extend(
        RemoteBackend(RemoteRepository(url, timeout=settings.timeout))
        for url in settings.remote_repositories
    )
    if settings.scraper:
        backends.append(ScraperBackend(MvnRepositoryScraper(timeout=settings.timeout)))
    return backends


def build_search(settings: SearchSettings | None = None, catalog: ArtifactCatalog | None = None) -> ArtifactSearch:
    """Assemble an ``ArtifactSearch`` from settings."""
    settings = settings or load_settings()
    catalog = catalog if catalog is not None else ArtifactCatalog()
    return ArtifactSearch(
        build_backends(settings, catalog),
        include=settings.include,
        exclude=settings.exclude,
        catalog=catalog,
    )
