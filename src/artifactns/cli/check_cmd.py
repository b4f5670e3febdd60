"""``artifactns check`` -- Test versions against a requirement.

Exit Codes:
    0 -- Every version satisfies the requirement.
    1 -- At least one version does not, or an input is invalid.
"""

from __future__ import annotations

import sys

import click

from artifactns.cli.output import print_check_results
from artifactns.core.requirement import VersionRequirement
from artifactns.exceptions import ArtifactNSError


@click.command("check")
@click.argument("requirement")
@click.argument("versions", nargs=-1, required=True)
def check_command(requirement: str, versions: tuple[str, ...]) -> None:
    """Check VERSIONS against the REQUIREMENT expression.

    Examples:

        artifactns check "~>5.3.1" 5.3.1 5.3.9 5.4.0

        artifactns check ">1.2 <1.3 !(>=1.2.5 & <=1.2.6)" 1.2.7
    """
    try:
        parsed = VersionRequirement.create(requirement)
        results = [(v, parsed.satisfied_by(v)) for v in versions]
    except ArtifactNSError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    print_check_results(parsed, results)
    sys.exit(0 if all(ok for _, ok in results) else 1)
