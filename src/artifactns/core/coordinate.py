"""Artifact coordinates and spec normalisation.

An artifact is identified by ``group:id:type[:classifier]:version``. The
same coordinate with its version replaced by the ``-`` placeholder is the
lookup key used by namespaces, so that every version of one artifact maps
to the same slot.

Callers may refer to an artifact in three ways, modelled here as a small
tagged union:

- ``StringSpec``     -- a coordinate string such as ``"log4j:log4j:jar:1.2.15"``.
- ``StructuredSpec`` -- a mapping (or ``ArtifactCoordinate``) of attributes.
- ``AliasRef``       -- a short symbolic name such as ``"spring"``.

``normalize_spec`` is the single entry point that turns any of these into
a lookup key plus, where available, a structured coordinate.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, Union

from artifactns.exceptions import ParseError

ARTIFACT_ATTRIBUTES: tuple[str, ...] = ("group", "id", "type", "classifier", "version")

# Version sentinel used in lookup keys.
PLACEHOLDER_VERSION: str = "-"

DEFAULT_TYPE: str = "jar"


@dataclass(frozen=True)
class ArtifactCoordinate:
    """Identifying tuple of a published artifact.

    ``group`` and ``id`` may be ``None`` only for partial bindings, where a
    namespace knows the selected version but no requirement supplies the
    remaining attributes.

    Attributes:
        group: Group identifier, e.g. ``org.springframework``.
        id: Artifact identifier, e.g. ``spring``.
        type: Packaging type, ``jar`` when omitted.
        classifier: Optional classifier such as ``sources``.
        version: Version string, requirement string or ``None``.
    """

    group: str | None = None
    id: str | None = None
    type: str = DEFAULT_TYPE
    classifier: str | None = None
    version: str | None = None

    @classmethod
    def parse(cls, spec: str) -> ArtifactCoordinate:
        """Parse a canonical coordinate string.

        Args:
            spec: ``group:id:type:version`` or ``group:id:type:classifier:version``.

        Returns:
            The parsed coordinate.

        Raises:
            ParseError: If the string does not have four or five parts.
        """
        parts = [p.strip() for p in str(spec).split(":")]
        if len(parts) == 4:
            group, art_id, art_type, version = parts
            classifier = None
        elif len(parts) == 5:
            group, art_id, art_type, classifier, version = parts
        else:
            raise ParseError(
                "Expecting <group:id:type:version> or "
                f"<group:id:type:classifier:version>, found <{spec}>"
            )
        if not group or not art_id or not art_type or not version:
            raise ParseError(f"Incomplete artifact spec <{spec}>")
        return cls(
            group=group,
            id=art_id,
            type=art_type,
            classifier=classifier or None,
            version=version,
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> ArtifactCoordinate:
        """Build a coordinate from an attribute mapping.

        Raises:
            ParseError: If the mapping carries keys that are not artifact attributes.
        """
        unknown = set(mapping) - set(ARTIFACT_ATTRIBUTES)
        if unknown:
            raise ParseError(
                f"Unknown artifact attributes {sorted(unknown)} in {dict(mapping)!r}"
            )
        values = {k: (None if v is None else str(v)) for k, v in mapping.items()}
        if not values.get("type"):
            values["type"] = DEFAULT_TYPE
        return cls(**values)

    @property
    def is_complete(self) -> bool:
        """True when group, id and version are all known."""
        return bool(self.group and self.id and self.version)

    @property
    def key(self) -> str:
        """Placeholder-versioned canonical string used as a lookup key."""
        return self.with_version(PLACEHOLDER_VERSION).to_string()

    def with_version(self, version: str | None) -> ArtifactCoordinate:
        """Return a copy with only the version replaced."""
        return replace(self, version=version)

    def same_artifact(self, other: ArtifactCoordinate) -> bool:
        """True if both coordinates name the same artifact, ignoring version."""
        return self.attributes() == other.attributes()

    def attributes(self) -> dict[str, str | None]:
        """Every attribute except the version."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name != "version"}

    def to_dict(self) -> dict[str, str]:
        """Attributes that are set, including the version."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def to_string(self) -> str:
        """Render the canonical coordinate string.

        Raises:
            ParseError: If group, id or version is missing.
        """
        if not self.is_complete:
            raise ParseError(f"Cannot render incomplete artifact spec {self.to_dict()!r}")
        parts = [self.group, self.id, self.type]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version)
        return ":".join(str(p) for p in parts)

    def __str__(self) -> str:
        if self.is_complete:
            return self.to_string()
        return repr(self.to_dict())


# ---------------------------------------------------------------------------
# Spec variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StringSpec:
    """A coordinate given as a ``group:id:...`` string."""

    text: str


@dataclass(frozen=True)
class StructuredSpec:
    """A coordinate given as attributes."""

    coordinate: ArtifactCoordinate


@dataclass(frozen=True)
class AliasRef:
    """A short symbolic name bound to a canonical key by a namespace."""

    name: str


Spec = Union[StringSpec, StructuredSpec, AliasRef]


def is_structured_mapping(value: Any) -> bool:
    """True if *value* is a mapping of artifact attributes.

    Mappings whose keys are all foreign to ``ARTIFACT_ATTRIBUTES`` are
    named spec mappings (``{alias: spec}``) instead.
    """
    return isinstance(value, Mapping) and bool(set(value) & set(ARTIFACT_ATTRIBUTES))


def classify_spec(value: Any) -> Spec:
    """Tag a raw spec argument with its variant.

    Raises:
        ParseError: If *value* cannot denote an artifact.
    """
    if isinstance(value, ArtifactCoordinate):
        return StructuredSpec(value)
    if is_structured_mapping(value):
        return StructuredSpec(ArtifactCoordinate.from_mapping(value))
    if isinstance(value, str):
        text = value.strip()
        if text.count(":") >= 2:
            return StringSpec(text)
        if text:
            return AliasRef(text)
    raise ParseError(f"Cannot interpret {value!r} as an artifact spec")


def normalize_spec(value: Any) -> tuple[str, ArtifactCoordinate | None]:
    """Resolve any spec variant to ``(key, coordinate)``.

    Alias references have no coordinate; their key is the alias name itself,
    which namespaces translate through their alias tables.
    """
    spec = classify_spec(value)
    if isinstance(spec, AliasRef):
        return spec.name, None
    if isinstance(spec, StringSpec):
        coordinate = ArtifactCoordinate.parse(spec.text)
    else:
        coordinate = spec.coordinate
    if not coordinate.group or not coordinate.id:
        raise ParseError(f"Artifact spec {coordinate.to_dict()!r} lacks group or id")
    return coordinate.key, coordinate
