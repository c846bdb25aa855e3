"""
Cleaning of Cargo build artifacts.

This module runs `cargo clean --manifest-path <Cargo.toml>` for every included
project of a partition, after an optional confirmation prompt. A project whose
clean command cannot be launched is logged and skipped; the remaining projects
are still cleaned. Exit statuses are recorded but not required to be zero.
"""

from __future__ import annotations

import enum
import subprocess
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

import typer

from cargo_vanish import config, report, terminal, utils
from cargo_vanish.projects import Project

if TYPE_CHECKING:
    from cargo_vanish.partition import ProjectPartition

LOG = utils.logger(__file__)

CONFIRM_MESSAGE = "Confirm you want to clean these projects [y/n]:"
ABORT_MESSAGE = "Aborting."
UNKNOWN_RESPONSE_MESSAGE = "Unknown response. Please try again."
_YES = ("y", "yes")
_NO = ("n", "no")


class Confirmation(enum.Enum):
    AWAITING_INPUT = enum.auto()
    CONFIRMED = enum.auto()
    ABORTED = enum.auto()


@dataclass
class CleanResult:
    """Outcome of cleaning one project."""

    project: Project
    returncode: int | None = None
    error: Exception | None = None

    @property
    def launched(self) -> bool:
        return self.error is None


def _read_stdin_line() -> str:
    return sys.stdin.readline()


def confirm(
    read_line: Callable[[], str] = _read_stdin_line, color: bool = True
) -> bool:
    """
    Ask the user to confirm cleaning.

    Keeps prompting until the response is y/yes or n/no, compared case
    insensitively. Read failures are logged and the read is retried. End of
    input aborts.

    Args:
        read_line: Reads one line of input, returning "" at end of input
        color: Whether to color the prompt

    Returns:
        True if confirmed, False if aborted
    """
    state = Confirmation.AWAITING_INPUT
    typer.echo(CONFIRM_MESSAGE)
    while state is Confirmation.AWAITING_INPUT:
        terminal.write(terminal.colorize(terminal.Color.GREEN, "> ", color), False)
        try:
            line = read_line()
        except OSError as e:
            LOG.warning("Error reading from stdin: %s", e)
            continue
        if not line:
            LOG.warning("No response, end of input reached")
            state = Confirmation.ABORTED
            break
        response = line.strip().lower()
        if response in _YES:
            state = Confirmation.CONFIRMED
        elif response in _NO:
            state = Confirmation.ABORTED
        else:
            typer.echo(UNKNOWN_RESPONSE_MESSAGE)
    if state is Confirmation.ABORTED:
        typer.echo(ABORT_MESSAGE)
        return False
    return True


def clean_command(project: Project, cargo: str = config.DEFAULT_CARGO) -> list[str]:
    return [cargo, "clean", "--manifest-path", str(project.path)]


def clean_project(
    project: Project, cargo: str = config.DEFAULT_CARGO, interactive: bool = False
) -> CleanResult:
    """
    Run cargo clean for a single project.

    Standard output is inherited so cargo's own output shows up directly.
    Launch failures, such as a missing cargo executable, are logged as
    warnings and reported in the result rather than raised.
    """
    typer.echo(f"Cleaning: {project.path}")
    args = clean_command(project, cargo)
    LOG.debug("Executing command: %s", args)
    try:
        proc = subprocess.run(args)
    except OSError as e:
        LOG.warning("Error cleaning %s: %s", project.path, e)
        result = CleanResult(project, error=e)
    else:
        if proc.returncode != 0:
            LOG.debug("Clean exited with %s: %s", proc.returncode, project.path)
        result = CleanResult(project, returncode=proc.returncode)
    terminal.erase(interactive)
    return result


def clean(
    partition: ProjectPartition,
    auto_confirm: bool = False,
    show_ignored: bool = False,
    interactive: bool = False,
    cargo: str | None = None,
    delay: float = 0,
    read_line: Callable[[], str] = _read_stdin_line,
) -> list[CleanResult]:
    """
    Clean the included projects of a partition.

    Lists the included projects, asks for confirmation unless auto_confirm is
    set, then cleans each included project in order. Ignored projects are
    never cleaned but are listed afterwards when show_ignored is set.

    Args:
        partition: Projects to clean
        auto_confirm: Skip the confirmation prompt
        show_ignored: List the ignored projects after cleaning
        interactive: Whether stdout is a terminal
        cargo: Cargo executable, defaults to the configured one
        delay: Seconds to pause between projects on a terminal
        read_line: Source of confirmation input

    Returns:
        One result per project a clean was attempted for, empty if aborted
    """
    if cargo is None:
        cargo = config.settings().cargo
    report.list_projects(partition.included, interactive)
    if partition.included and not auto_confirm:
        if not confirm(read_line, interactive):
            return []
    results = []
    for project in partition.included:
        terminal.pause(delay, interactive)
        results.append(clean_project(project, cargo, interactive))
    failed = [r for r in results if not r.launched]
    if failed:
        LOG.warning("Failed to clean %s of %s projects", len(failed), len(results))
    if show_ignored:
        report.list_ignored(partition, interactive)
    return results
