"""Hierarchical artifact namespaces and the process-wide registry.

Most callers use the module-level helpers, which act on a default
registry shared by the whole process::

    from artifactns.core.namespace import instance, load, reset

    instance(True).use({"log4j": "log4j:log4j:jar:1.2.15"})
    instance("one:two")["log4j"]   # log4j:log4j:jar:1.2.15
    reset()                        # test isolation
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from artifactns.core.namespace.models import ArtifactRequirement
from artifactns.core.namespace.namespace import ROOT, ArtifactNamespace
from artifactns.core.namespace.registry import (
    NamespaceRegistry,
    current_scope,
    normalize_namespace_name,
)

default_registry = NamespaceRegistry()


def instance(name: Any = None) -> ArtifactNamespace:
    """Namespace for *name* in the default registry."""
    return default_registry.instance(name)


def load(namespaces: dict[Any, Any]) -> None:
    """Bulk load namespaces into the default registry."""
    default_registry.load(namespaces)


def load_profile(path: Path | str, environment: str | None = None) -> None:
    """Load a YAML profile into the default registry."""
    default_registry.load_profile(path, environment)


def reset() -> None:
    """Forget every namespace of the default registry."""
    default_registry.reset()


__all__ = [
    "ROOT",
    "ArtifactNamespace",
    "ArtifactRequirement",
    "NamespaceRegistry",
    "current_scope",
    "default_registry",
    "instance",
    "load",
    "load_profile",
    "normalize_namespace_name",
    "reset",
]
