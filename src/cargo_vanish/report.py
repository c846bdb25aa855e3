"""
Rendering of project sets for the terminal.

Each project is printed as "<size> <- <directory>" followed by a summary line
with the project count and the total known artifact size.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

import typer

from cargo_vanish import sizes
from cargo_vanish.projects import Project

if TYPE_CHECKING:
    from cargo_vanish.partition import ProjectPartition

IGNORED_HEADER = "Ignored:"


def project_line(project: Project, color: bool = True) -> str:
    return f"{sizes.format_size(project.size, color)} <- {project.dir}"


def summary_line(projects: Iterable[Project], color: bool = True) -> str:
    projects = list(projects)
    total = sizes.total_size(p.size for p in projects)
    return f"Summary: {len(projects)} projects, {sizes.format_size(total, color)}"


def list_projects(projects: Iterable[Project], color: bool = True):
    """Print one line per project followed by the summary line."""
    projects = list(projects)
    for project in projects:
        typer.echo(project_line(project, color))
    typer.echo(summary_line(projects, color))


def list_partition(
    partition: ProjectPartition, show_ignored: bool = True, color: bool = True
):
    """Print the included projects and, if requested, the ignored ones."""
    list_projects(partition.included, color)
    if show_ignored:
        list_ignored(partition, color)


def list_ignored(partition: ProjectPartition, color: bool = True):
    typer.echo(IGNORED_HEADER)
    list_projects(partition.ignored, color)


def print_json(partition: ProjectPartition):
    typer.echo(partition.to_json())
