"""artifactns CLI -- inspect requirements, namespaces and version search.

Entry point for the ``artifactns`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    check         -- Test versions against a requirement expression.
    best-version  -- Search configured repositories for the best version.
    resolve       -- Load a profile and list a namespace's artifacts.
    show          -- Load a profile and list a namespace's bindings.

Usage::

    artifactns check ">1.2 <1.3" 1.2.7 1.3
    artifactns best-version "log4j:log4j:jar:>=1.2 <1.3"
    artifactns resolve profiles.yaml --env development --namespace one:oldie
    artifactns show profiles.yaml --namespace one
"""

from __future__ import annotations

import logging

import click

from artifactns import __version__
from artifactns.cli.check_cmd import check_command
from artifactns.cli.namespace_cmd import resolve_command, show_command
from artifactns.cli.search_cmd import best_version_command

LOG_FORMAT = "[%(levelname)s] %(message)s"


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", count=True, help="Increase log output (-v info, -vv debug).")
def cli(verbose: int) -> None:
    """artifactns: hierarchical artifact version requirements and search.

    Declare requirements and selections per namespace, validate them
    against inherited constraints, and find the best matching version in
    local and remote repositories.
    """
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(format=LOG_FORMAT, level=level)


# Register all subcommands
cli.add_command(check_command)
cli.add_command(best_version_command)
cli.add_command(resolve_command)
cli.add_command(show_command)
