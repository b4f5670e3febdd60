"""Process-wide registry of artifact namespaces.

The registry maps normalised names to ``ArtifactNamespace`` instances.
Namespaces are only created through ``get_or_create`` (or ``instance``,
which coerces its argument first) and live until ``reset``.

Bulk loading accepts the ``artifacts`` section of a profile::

    # profiles.yaml
    development:
      artifacts:
        ~:                                   # root namespace
          spring: org.springframework:spring:jar:2.5
          log4j:  log4j:log4j:jar:1.2.15
        myplugin.addon:                      # module namespace
          xmlbeans: "2.2"
        one:oldie:                           # subproject one:oldie
          spring: org.springframework:spring:jar:1.0
          asm:    "asm:asm:jar:>=3.0 <4"     # requirement, goes to need()
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from types import ModuleType
from typing import Any

import yaml

from artifactns.config import build_search
from artifactns.core.coordinate import ArtifactCoordinate, StringSpec, classify_spec
from artifactns.core.namespace.namespace import ROOT, ArtifactNamespace
from artifactns.core.requirement import VersionRequirement
from artifactns.exceptions import ConfigError
from artifactns.search import ArtifactCatalog, ArtifactSearch

logger = logging.getLogger(__name__)

_current_scope: ContextVar[str | None] = ContextVar("artifactns_scope", default=None)

_SEPARATORS_RE = re.compile(r"[:.]+")


@contextmanager
def current_scope(name: str) -> Iterator[str]:
    """Make *name* the namespace used by ``instance()`` without arguments.

    The build orchestration enters this around each project or task so
    that code running inside it reaches the matching namespace.
    """
    token = _current_scope.set(name)
    try:
        yield name
    finally:
        _current_scope.reset(token)


def normalize_namespace_name(name: Any) -> str:
    """Coerce a lookup key to a canonical namespace name.

    ``True`` is root; ``None``/``False`` is the current scope (root when
    unset); sequences are joined with ``:``; modules and classes use their
    qualified names; objects with a ``name`` attribute (projects) use it.
    Dots and repeated colons all become single colons.
    """
    if name is True:
        return ROOT
    if name is None or name is False:
        name = _current_scope.get()
    elif isinstance(name, (list, tuple)):
        name = ":".join(str(part) for part in name)
    elif isinstance(name, ModuleType):
        name = name.__name__
    elif isinstance(name, type):
        name = f"{name.__module__}.{name.__qualname__}"
    elif not isinstance(name, str) and hasattr(name, "name"):
        name = name.name
    text = _SEPARATORS_RE.sub(":", str(name or "")).strip(":")
    return text or ROOT


class NamespaceRegistry:
    """Owns every namespace of a process (or of a test).

    Args:
        search: Best-version search used when a namespace must pick a
            version itself. Built from the default settings on first use
            when omitted.
        catalog: Runtime catalog of artifacts known to the process.
        materialize: Turns a resolved coordinate into an artifact handle;
            returns the coordinate itself by default.
    """

    def __init__(
        self,
        search: ArtifactSearch | None = None,
        *,
        catalog: ArtifactCatalog | None = None,
        materialize: Callable[[ArtifactCoordinate], Any] | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._instances: dict[str, ArtifactNamespace] = {}
        self.catalog = catalog if catalog is not None else ArtifactCatalog()
        self._search = search
        self.materialize: Callable[[ArtifactCoordinate], Any] = materialize or (lambda c: c)

    @property
    def search(self) -> ArtifactSearch:
        with self._lock:
            if self._search is None:
                self._search = build_search(catalog=self.catalog)
            return self._search

    @search.setter
    def search(self, search: ArtifactSearch) -> None:
        with self._lock:
            self._search = search

    # -- lookup -------------------------------------------------------------

    def get_or_create(self, name: str) -> ArtifactNamespace:
        """Return the namespace called *name*, creating it on first use."""
        name = normalize_namespace_name(name)
        with self._lock:
            namespace = self._instances.get(name)
            if namespace is None:
                namespace = ArtifactNamespace(name, self)
                self._instances[name] = namespace
                logger.debug("Created namespace %s", name)
            return namespace

    def get(self, name: Any) -> ArtifactNamespace | None:
        """Return an existing namespace without creating it."""
        with self._lock:
            return self._instances.get(normalize_namespace_name(name))

    def instance(self, name: Any = None) -> ArtifactNamespace:
        """Coerce *name* (see ``normalize_namespace_name``) and get or create it."""
        return self.get_or_create(normalize_namespace_name(name))

    @property
    def root(self) -> ArtifactNamespace:
        return self.get_or_create(ROOT)

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._instances)

    def __contains__(self, name: Any) -> bool:
        return self.get(name) is not None

    def reset(self) -> None:
        """Forget every namespace and the runtime catalog."""
        with self._lock:
            self._instances.clear()
            self.catalog.clear()

    # -- bulk loading -------------------------------------------------------

    def load(self, namespaces: Mapping[Any, Any]) -> None:
        """Populate namespaces from ``{namespace: {alias or None: spec}}``.

        A ``None`` namespace name means root. Values whose version part is
        a requirement expression are passed to ``need``, everything else
        to ``use``. Under a ``None`` alias, a list of specs is accepted.

        Raises:
            ParseError: If a spec is malformed.
            RequirementViolation: If a selection violates a requirement.
        """
        for ns_name, entries in namespaces.items():
            namespace = self.get_or_create(ROOT if ns_name is None else ns_name)
            if entries is None:
                continue
            if not isinstance(entries, Mapping):
                entries = {None: entries}
            for alias, value in entries.items():
                values = value if isinstance(value, list) else [value]
                for item in values:
                    self._load_entry(namespace, alias, item)

    @staticmethod
    def _load_entry(namespace: ArtifactNamespace, alias: Any, value: Any) -> None:
        if not isinstance(value, (str, Mapping)):
            value = str(value)
        if isinstance(value, str) and isinstance(classify_spec(value), StringSpec):
            version = ArtifactCoordinate.parse(value).version
        elif isinstance(value, Mapping):
            version = value.get("version")
        else:
            version = value
        spec = value if alias is None else {str(alias): value}
        if VersionRequirement.is_requirement(version):
            namespace.need(spec)
        else:
            namespace.use(spec)

    def load_profile(self, path: Path | str, environment: str | None = None) -> None:
        """Load the ``artifacts`` section of a YAML profile file.

        Args:
            path: Profile file.
            environment: Top-level profile to read (e.g. ``development``);
                the whole document when omitted.

        Raises:
            ConfigError: If the file cannot be read or is not a mapping.
        """
        path = Path(path)
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot read profile {path}: {exc}") from exc
        if environment is not None:
            if not isinstance(data, Mapping) or environment not in data:
                raise ConfigError(f"Profile {path} has no environment {environment!r}")
            data = data[environment] or {}
        if isinstance(data, Mapping) and "artifacts" in data:
            data = data["artifacts"] or {}
        if not isinstance(data, Mapping):
            raise ConfigError(f"Artifacts section of {path} must be a mapping")
        logger.info("Loading artifact namespaces from %s", path)
        self.load(data)
