"""artifactns exception hierarchy.

All public exceptions inherit from ArtifactNSError, giving callers a single
base class to catch when they want to handle any resolution failure
without swallowing unrelated errors.
"""


class ArtifactNSError(Exception):
    """Base exception for all artifactns errors."""


class ParseError(ArtifactNSError):
    """Raised when a requirement or coordinate string cannot be parsed.

    Covers invalid characters, malformed comparator terms, unbalanced
    parentheses, negations without a parenthesised operand and
    coordinate strings with the wrong number of parts.
    """


class InvalidVersionError(ArtifactNSError):
    """Raised when a value expected to be a version is not one."""


class RequirementViolation(ArtifactNSError):
    """Raised when a selection conflicts with an active requirement.

    Covers versions outside the required range and selections whose
    group, id, type or classifier differ from the requirement.
    """


class ArtifactNotFoundError(ArtifactNSError):
    """Raised when no backend and no default yield a matching version."""


class StructuralError(ArtifactNSError):
    """Raised for illegal operations on the namespace hierarchy."""


class ResourceNotFoundError(ArtifactNSError):
    """Raised by repository backends when a remote resource does not exist."""


class ConfigError(ArtifactNSError):
    """Raised when settings or profile files contain invalid values."""
