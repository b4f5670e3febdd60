"""Rich output formatting helpers for the artifactns CLI."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from artifactns.core.namespace import ArtifactNamespace
from artifactns.core.requirement import VersionRequirement

console = Console()


def print_check_results(requirement: VersionRequirement, results: list[tuple[str, bool]]) -> None:
    """Print a table of versions and whether each satisfies *requirement*."""
    table = Table(title=f"Requirement {requirement}", show_header=True, header_style="bold")
    table.add_column("Version", style="bold")
    table.add_column("Result", justify="center")
    for version, ok in results:
        status = Text("SATISFIED", style="bold green") if ok else Text("REJECTED", style="bold red")
        table.add_row(version, status)
    console.print(table)


def print_artifacts(namespace: str, artifacts: list[Any]) -> None:
    """Print the artifacts resolved for a namespace."""
    if not artifacts:
        console.print(f"[dim]Namespace {namespace} uses no artifacts.[/dim]")
        return
    table = Table(title=f"Artifacts of {namespace}", show_header=True, header_style="bold")
    table.add_column("Artifact", style="bold")
    for artifact in artifacts:
        table.add_row(str(artifact))
    console.print(table)


def print_namespace(namespace: ArtifactNamespace) -> None:
    """Print the requirements, selections and aliases declared on a namespace."""
    table = Table(title=f"Namespace {namespace.name}", show_header=True, header_style="bold")
    table.add_column("Name", style="bold")
    table.add_column("Requirement", style="cyan")
    table.add_column("Selection", style="green")

    aliases = {key: alias for alias, key in namespace.aliases().items()}
    selections = namespace.selections()
    keys = list(namespace.requirements())
    keys += [k for k in selections if k not in keys]
    if not keys:
        console.print(f"[dim]Namespace {namespace.name} declares nothing.[/dim]")
        return
    for key in keys:
        needed = namespace.requirement(key)
        selected = namespace.spec(key)
        label = f"{aliases[key]} ({key})" if key in aliases else key
        table.add_row(
            label,
            str(needed.version) if needed else "-",
            (selected.version or "-") if selected else "-",
        )
    console.print(table)
