"""
Discovery of Cargo projects beneath a root directory.

The walk is top-down over os.walk, pruning hidden directories in place so they
are never descended into. Each Cargo.toml found is turned into a Project;
manifests that fail to load are logged and skipped so one broken project never
aborts the scan. When stdout is a terminal a transient progress line shows the
most recently discovered project.
"""

import os
import pathlib
from os import PathLike
from typing import Iterator

from cargo_vanish import sizes, terminal, utils
from cargo_vanish.errors import InvalidRootError, ProjectError
from cargo_vanish.projects import MANIFEST_FILE_NAME, Project

LOG = utils.logger(__file__)

HIDDEN_PREFIX = "."


def is_hidden(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)


def validate_root(root: PathLike | str) -> pathlib.Path:
    """
    Check that the scan root is an accessible directory.

    Raises:
        InvalidRootError: If the root is missing, not a directory or unreadable
    """
    root_path = pathlib.Path(root).expanduser()
    try:
        if not root_path.is_dir():
            raise InvalidRootError(f"Root is not a directory: {root_path}")
        with os.scandir(root_path):
            pass
    except OSError as e:
        raise InvalidRootError(f"Failed to access root {root_path}: {e}") from e
    return root_path


def _walk_error(error: OSError):
    LOG.warning("Walk error: %s", error)


def walk_manifests(
    root: PathLike | str, include_hidden: bool = False
) -> Iterator[pathlib.Path]:
    """
    Yield the path of every Cargo.toml beneath root.

    Directories are visited in sorted order. Hidden files and directories are
    skipped unless include_hidden is set; the root itself is never skipped even
    if its own name is hidden. Traversal errors are logged as warnings.

    Args:
        root: Directory to scan
        include_hidden: Whether to descend into and match hidden entries

    Yields:
        Paths to Cargo.toml files, including the file name
    """
    for dir_path, dir_names, file_names in os.walk(root, onerror=_walk_error):
        if not include_hidden:
            dir_names[:] = [d for d in dir_names if not is_hidden(d)]
        dir_names.sort()
        if MANIFEST_FILE_NAME in file_names:
            yield pathlib.Path(dir_path) / MANIFEST_FILE_NAME


def discover(
    root: PathLike | str,
    include_hidden: bool = False,
    interactive: bool = False,
    delay: float = 0,
) -> Iterator[Project]:
    """
    Discover Cargo projects beneath root.

    Args:
        root: Directory to scan
        include_hidden: Whether to descend into hidden directories
        interactive: Whether to print transient progress lines
        delay: Seconds to pause between progress lines on a terminal

    Yields:
        A Project for each readable Cargo.toml
    """
    shown = False
    try:
        for manifest_path in walk_manifests(root, include_hidden=include_hidden):
            try:
                project = Project(manifest_path)
            except ProjectError as e:
                LOG.warning("Skipping project: %s", e)
                continue
            LOG.debug("Discovered project: %r", project)
            terminal.transient(
                f"{sizes.format_size(project.size, interactive)} <- {project.dir}",
                interactive,
                erase_previous=shown,
            )
            shown = True
            yield project
            terminal.pause(delay, interactive)
    finally:
        if shown:
            terminal.erase(interactive)
