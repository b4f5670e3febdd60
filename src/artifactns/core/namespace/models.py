"""Stored requirement record of a namespace."""

from __future__ import annotations

from dataclasses import dataclass

from artifactns.core.coordinate import DEFAULT_TYPE, ArtifactCoordinate
from artifactns.core.requirement import VersionRequirement


@dataclass(frozen=True)
class ArtifactRequirement:
    """Coordinate attributes plus the version requirement they must meet.

    Attributes:
        group: Group identifier.
        id: Artifact identifier.
        type: Packaging type.
        classifier: Optional classifier.
        version: Parsed version requirement.
    """

    group: str
    id: str
    type: str = DEFAULT_TYPE
    classifier: str | None = None
    version: VersionRequirement = VersionRequirement()

    @classmethod
    def from_coordinate(cls, coordinate: ArtifactCoordinate, requirement: str | VersionRequirement) -> ArtifactRequirement:
        return cls(
            group=coordinate.group or "",
            id=coordinate.id or "",
            type=coordinate.type,
            classifier=coordinate.classifier,
            version=VersionRequirement.create(requirement),
        )

    @property
    def coordinate(self) -> ArtifactCoordinate:
        """The coordinate with the requirement string in its version slot."""
        return ArtifactCoordinate(self.group, self.id, self.type, self.classifier, str(self.version))

    @property
    def key(self) -> str:
        return self.coordinate.key

    def attributes(self) -> dict[str, str | None]:
        return self.coordinate.attributes()

    def with_requirement(self, requirement: str | VersionRequirement) -> ArtifactRequirement:
        return ArtifactRequirement.from_coordinate(self.coordinate, requirement)

    def __str__(self) -> str:
        return self.coordinate.to_string()
