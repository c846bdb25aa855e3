"""
Main entry point for the cargo-vanish CLI.

Scans a directory tree for Cargo projects, measures their target/ build
artifact directories and either lists them or cleans them with `cargo clean`.
Projects can be filtered with a regular expression matched against the
manifest path:
- By default matching projects are ignored
- With --invert only matching projects are included
"""

from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from pydantic import ValidationError

from cargo_vanish import config, discover, partition, report, terminal, utils
from cargo_vanish.errors import VanishError

LOG = utils.logger(__file__)

app = typer.Typer(help="Manage rustc build artifacts.", add_completion=False)


@app.command()
def vanish(
    directory: Annotated[
        Optional[Path],
        typer.Option(
            "-d",
            "--directory",
            help="Root directory to scan. Defaults to CARGO_VANISH_DIRECTORY or the home directory.",
        ),
    ] = None,
    list_only: Annotated[
        bool,
        typer.Option("-l", "--list", help="List projects instead of cleaning them."),
    ] = False,
    exclude: Annotated[
        Optional[str],
        typer.Option(
            "-e",
            "--exclude",
            help="Regular expression; projects whose manifest path matches are ignored.",
        ),
    ] = None,
    invert: Annotated[
        bool,
        typer.Option(
            "-v",
            "--invert",
            help="Only include projects matching --exclude. Requires --exclude.",
        ),
    ] = False,
    hidden: Annotated[
        bool,
        typer.Option("-H", "--hidden", help="Search hidden directories."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("-y", "--yes", help="Clean without asking for confirmation."),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("-j", "--json", help="Print projects as JSON. Requires --list."),
    ] = False,
    show_ignored: Annotated[
        bool,
        typer.Option(
            "--show-ignored/--hide-ignored",
            help="Also list the projects excluded by the pattern.",
        ),
    ] = True,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level", help="Log level. Defaults to LOG_LEVEL or INFO."
        ),
    ] = None,
):
    """
    Find Cargo projects and clean or list their build artifacts.
    """
    if invert and exclude is None:
        raise typer.BadParameter("--invert requires --exclude", param_hint="--invert")
    if json_output and not list_only:
        raise typer.BadParameter("--json requires --list", param_hint="--json")
    if log_level is not None and not utils.is_log_level(log_level):
        raise typer.BadParameter(
            f"Unknown log level: {log_level}", param_hint="--log-level"
        )
    try:
        settings = config.settings()
    except ValidationError as e:
        _fail(f"Invalid configuration: {e}")
    utils.set_log_level(log_level or settings.log_level)

    interactive = terminal.is_interactive() and not json_output
    LOG.debug("Settings: %s interactive: %s", settings, interactive)
    try:
        root = discover.validate_root(directory or settings.directory)
        found = partition.classify(
            discover.discover(
                root,
                include_hidden=hidden,
                interactive=interactive,
                delay=settings.delay,
            ),
            pattern=exclude,
            invert=invert,
        )
    except VanishError as e:
        _fail(str(e))
    except OSError as e:
        _fail(f"Filesystem error: {e}")

    if json_output:
        report.print_json(found)
    elif list_only:
        found.list(show_ignored=show_ignored, color=interactive)
    else:
        found.clean(
            auto_confirm=yes,
            show_ignored=show_ignored,
            interactive=interactive,
            cargo=settings.cargo,
            delay=settings.delay,
        )


def _fail(message: str) -> NoReturn:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


def main():
    app()


if __name__ == "__main__":
    main()
