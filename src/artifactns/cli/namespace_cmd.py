"""``artifactns resolve`` / ``artifactns show`` -- Inspect profile namespaces.

Both commands load the ``artifacts`` section of a YAML profile into a
fresh registry. ``show`` lists what the namespace declares; ``resolve``
materialises its selections, searching repositories for requirements
that have no selection.

Exit Codes:
    0 -- Success.
    1 -- The profile is invalid or an artifact cannot be resolved.
"""

from __future__ import annotations

import sys

import click

from artifactns.cli.output import print_artifacts, print_namespace
from artifactns.config import build_search, load_settings
from artifactns.core.namespace import NamespaceRegistry
from artifactns.exceptions import ArtifactNSError

_profile_argument = click.argument("profile", type=click.Path(exists=True, dir_okay=False))
_env_option = click.option("--env", "environment", default=None, help="Profile environment, e.g. development.")
_namespace_option = click.option("--namespace", "-n", default="root", show_default=True, help="Namespace name.")


def _load_registry(profile: str, environment: str | None, settings_path: str | None = None) -> NamespaceRegistry:
    registry = NamespaceRegistry()
    if settings_path is not None:
        registry.search = build_search(load_settings(settings_path), registry.catalog)
    registry.load_profile(profile, environment)
    return registry


@click.command("resolve")
@_profile_argument
@_env_option
@_namespace_option
@click.option("--parents/--no-parents", default=False, help="Include selections inherited from parents.")
@click.option(
    "--settings", "settings_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Settings YAML file used when a version must be searched.",
)
def resolve_command(
    profile: str,
    environment: str | None,
    namespace: str,
    parents: bool,
    settings_path: str | None,
) -> None:
    """List the artifacts NAMESPACE uses according to PROFILE."""
    try:
        registry = _load_registry(profile, environment, settings_path)
        ns = registry.instance(namespace)
        artifacts = ns.values(include_parents=parents)
        for key in ns.requirements():
            if ns.spec(key) is None:
                artifacts.append(ns.resolve(key))
    except ArtifactNSError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    print_artifacts(ns.name, artifacts)


@click.command("show")
@_profile_argument
@_env_option
@_namespace_option
def show_command(profile: str, environment: str | None, namespace: str) -> None:
    """Show requirements, selections and aliases of NAMESPACE in PROFILE."""
    try:
        registry = _load_registry(profile, environment)
    except ArtifactNSError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    print_namespace(registry.instance(namespace))
