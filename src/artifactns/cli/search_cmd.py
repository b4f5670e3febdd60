"""``artifactns best-version`` -- Find the best version for a requirement.

Searches the runtime catalog, the local repository, each configured
remote repository and finally mvnrepository.com, stopping at the first
version that satisfies the requirement.

Usage::

    artifactns best-version "log4j:log4j:jar:>=1.2 <1.3"
    artifactns best-version "junit:junit:jar:~>4.0" --exclude mvnrepository
    artifactns best-version "org.example:lib:jar:>1" --settings ci-settings.yaml

Exit Codes:
    0 -- A version was found.
    1 -- Nothing satisfies the requirement or the input is invalid.
"""

from __future__ import annotations

import sys

import click

from artifactns.config import build_search, load_settings
from artifactns.exceptions import ArtifactNSError


@click.command("best-version")
@click.argument("spec")
@click.option(
    "--settings", "settings_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Settings YAML file (default: ~/.artifactns/settings.yaml).",
)
@click.option("--include", multiple=True, help="Only consult these backend types or origins.")
@click.option("--exclude", multiple=True, help="Never consult these backend types or origins.")
def best_version_command(
    settings_path: str | None,
    spec: str,
    include: tuple[str, ...],
    exclude: tuple[str, ...],
) -> None:
    """Print the best version of SPEC (``group:id:type:requirement``)."""
    try:
        settings = load_settings(settings_path)
        settings.include.extend(include)
        settings.exclude.extend(exclude)
        resolved = build_search(settings).best_version(spec)
    except ArtifactNSError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    click.echo(resolved.to_string())
