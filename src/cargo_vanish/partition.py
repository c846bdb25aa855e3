"""
Partitioning of discovered projects into included and ignored sets.

A filter pattern is searched for anywhere in each project's manifest path.
By default matching projects are ignored and everything else is included;
inverting the filter swaps the two. Both sets iterate in project order
(artifact size, then path) regardless of discovery order.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from cargo_vanish import clean as clean_runner
from cargo_vanish import report, sizes, utils
from cargo_vanish.errors import PatternError
from cargo_vanish.projects import Project

LOG = utils.logger(__file__)


class ProjectSet:
    """
    Ordered set of projects, unique by manifest path.

    Adding a project whose path is already present keeps the first one.
    """

    def __init__(self, projects: Iterable[Project] = ()):
        self._projects: dict = {}
        for project in projects:
            self.add(project)

    def add(self, project: Project) -> bool:
        if project.path in self._projects:
            LOG.debug("Duplicate project ignored: %s", project.path)
            return False
        self._projects[project.path] = project
        return True

    @property
    def total_size(self) -> int:
        return sizes.total_size(p.size for p in self._projects.values())

    def to_list(self) -> list[dict[str, Any]]:
        return [p.to_dict() for p in self]

    def __iter__(self) -> Iterator[Project]:
        return iter(sorted(self._projects.values()))

    def __len__(self):
        return len(self._projects)

    def __contains__(self, project):
        return isinstance(project, Project) and project.path in self._projects

    def __repr__(self):
        return f"{ProjectSet.__name__}({list(self)!r})"


@dataclass
class ProjectPartition:
    """Disjoint split of discovered projects into included and ignored."""

    included: ProjectSet = field(default_factory=ProjectSet)
    ignored: ProjectSet = field(default_factory=ProjectSet)

    def list(self, show_ignored: bool = True, color: bool = True):
        report.list_partition(self, show_ignored=show_ignored, color=color)

    def clean(self, **kwargs) -> list[clean_runner.CleanResult]:
        """Clean the included projects, see cargo_vanish.clean.clean."""
        return clean_runner.clean(self, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {"included": self.included.to_list(), "ignored": self.ignored.to_list()}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def compile_pattern(pattern: str | re.Pattern | None) -> re.Pattern | None:
    """
    Compile a filter pattern.

    Raises:
        PatternError: If the pattern is not a valid regular expression
    """
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(f"Invalid pattern {pattern!r}: {e}") from e


def matches(project: Project, pattern: re.Pattern | None) -> bool:
    return pattern is not None and pattern.search(str(project.path)) is not None


def classify(
    projects: Iterable[Project],
    pattern: str | re.Pattern | None = None,
    invert: bool = False,
) -> ProjectPartition:
    """
    Split projects into included and ignored sets.

    Args:
        projects: Projects to classify, typically a discovery stream
        pattern: Regular expression searched for in each manifest path. When
                 None no project matches.
        invert: Include matching projects instead of ignoring them

    Returns:
        The resulting partition

    Raises:
        PatternError: If pattern is an invalid regular expression string
    """
    compiled = compile_pattern(pattern)
    matched = ProjectSet()
    unmatched = ProjectSet()
    for project in projects:
        if project in matched or project in unmatched:
            continue
        (matched if matches(project, compiled) else unmatched).add(project)
    if invert:
        return ProjectPartition(included=matched, ignored=unmatched)
    return ProjectPartition(included=unmatched, ignored=matched)
