"""Version requirement language and evaluator.

Public names are re-exported here so callers can write
``from artifactns.core.requirement import VersionRequirement``.
"""

from artifactns.core.requirement.parser import parse_requirement, tokenize
from artifactns.core.requirement.requirement import (
    COMPARATORS,
    Comparison,
    Operator,
    VersionRequirement,
)
from artifactns.core.requirement.version import (
    Version,
    is_version,
    sort_versions,
    version_key,
)

__all__ = [
    "COMPARATORS",
    "Comparison",
    "Operator",
    "Version",
    "VersionRequirement",
    "is_version",
    "parse_requirement",
    "sort_versions",
    "tokenize",
    "version_key",
]
