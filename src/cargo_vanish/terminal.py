"""
Terminal presentation helpers.

Pure functions for coloring labels and producing the erase sequence used by
transient progress lines. Whether the terminal is interactive is decided once
by the caller and passed in; nothing here keeps global state.
"""

import sys
import time
from enum import Enum
from typing import TextIO

import typer

# Move the cursor up a line, clear it and return to column zero
ERASE = "\x1b[1A\x1b[2K\r"


class Color(str, Enum):
    RED = typer.colors.RED
    GREEN = typer.colors.GREEN
    YELLOW = typer.colors.YELLOW
    BLUE = typer.colors.BLUE
    MAGENTA = typer.colors.MAGENTA


def is_interactive(stream: TextIO | None = None) -> bool:
    """Check whether the stream (stdout by default) is attached to a terminal."""
    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # closed stream
        return False


def colorize(color: Color, text: str, enabled: bool = True) -> str:
    """Wrap text in the escape codes for the given color, if enabled."""
    if not enabled:
        return text
    return typer.style(text, fg=color.value)


def erase_line() -> str:
    return ERASE


def write(text: str, newline: bool = True):
    """Write to stdout and flush immediately, keeping escape sequences."""
    typer.echo(text, nl=newline, color=True)


def erase(interactive: bool):
    """Erase the last transient line when attached to a terminal."""
    if interactive:
        write(erase_line(), newline=False)


def transient(text: str, interactive: bool, erase_previous: bool = True):
    """Print a transient progress line, replacing the previous one."""
    if not interactive:
        return
    write((erase_line() if erase_previous else "") + text)


def pause(seconds: float, interactive: bool):
    """Pace progress output for readability on a terminal."""
    if interactive and seconds > 0:
        time.sleep(seconds)
