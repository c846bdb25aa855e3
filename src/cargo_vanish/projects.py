"""
Project model for Cargo projects discovered on disk.

This module provides the Project class, which wraps a Cargo.toml manifest and
provides:
- Validation that the path points at a Cargo.toml file
- Name resolution from package.name, falling back to the directory name
- Size measurement of the sibling target/ build artifact directory
- A total ordering by artifact size, then manifest path

A project is uniquely identified by the path to its Cargo.toml. The stored path
includes the Cargo.toml file name.
"""

import enum
import functools
import os
import pathlib
import stat
from dataclasses import dataclass
from os import PathLike
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from cargo_vanish import sizes, utils
from cargo_vanish.errors import (
    ArtifactAccessError,
    InvalidManifestError,
    ManifestParseError,
    ManifestReadError,
    NameResolutionError,
)

LOG = utils.logger(__file__)

# Standard filename for Cargo project manifests
MANIFEST_FILE_NAME = "Cargo.toml"
# Build artifact directory created by cargo next to the manifest
ARTIFACT_DIR_NAME = "target"


class NameKind(str, enum.Enum):
    EXPLICIT = "Explicit"
    INFERRED = "Inferred"


@dataclass(frozen=True)
class Name:
    """
    Name of a project.

    EXPLICIT names come from the package.name field of a Cargo.toml. INFERRED
    names are the name of the manifest's parent directory and are used when no
    package.name field exists. Inferred names render in brackets.
    """

    kind: NameKind
    value: str

    @classmethod
    def explicit(cls, value: str) -> "Name":
        return cls(NameKind.EXPLICIT, value)

    @classmethod
    def inferred(cls, value: str) -> "Name":
        return cls(NameKind.INFERRED, value)

    def to_dict(self) -> dict[str, str]:
        return {self.kind.value: self.value}

    def __str__(self):
        if self.kind is NameKind.INFERRED:
            return f"[{self.value}]"
        return self.value


def is_manifest(path: PathLike | str) -> bool:
    """Check whether the final component of a path is exactly Cargo.toml."""
    return pathlib.Path(path).name == MANIFEST_FILE_NAME


def artifact_size(target: PathLike | str) -> int | None:
    """
    Measure the size of a build artifact directory.

    Sums the byte length of every regular file beneath the directory. Symlinks
    are neither followed nor counted, and entries that cannot be read are
    skipped.

    Args:
        target: Path to the artifact directory

    Returns:
        Total size in bytes, or None if the directory does not exist

    Raises:
        ArtifactAccessError: If checking for the directory itself fails
    """
    try:
        target_stat = os.stat(target)
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as e:
        raise ArtifactAccessError(
            f"Failed to access target directory {target}: {e}", path=target
        ) from e
    if not stat.S_ISDIR(target_stat.st_mode):
        LOG.debug("Artifact path is not a directory: %s", target)
        return None

    total = 0
    # unreadable directories are dropped by os.walk when onerror is None
    for root, _, file_names in os.walk(target, followlinks=False):
        for file_name in file_names:
            try:
                file_stat = os.lstat(os.path.join(root, file_name))
            except OSError:
                continue
            if stat.S_ISREG(file_stat.st_mode):
                total += file_stat.st_size
    return total


@functools.total_ordering
class Project:
    """
    Represents a Cargo project with its manifest and build artifact size.

    Two projects are equal when their manifest paths are equal. Projects order
    by artifact size ascending, with unknown sizes before any known size
    (including zero), and then by manifest path.
    """

    def __init__(self, path: PathLike | str):
        """
        Initialize a Project from the path to its Cargo.toml.

        Reads and parses the manifest, resolves the project name and measures
        the target/ directory next to it.

        Args:
            path: Path to a Cargo.toml file

        Raises:
            InvalidManifestError: If the path does not name a Cargo.toml file
            ManifestReadError: If the manifest cannot be read
            ManifestParseError: If the manifest is not valid TOML
            NameResolutionError: If neither package.name nor a parent directory name exists
            ArtifactAccessError: If the target directory cannot be checked
        """
        self.path = pathlib.Path(path)
        if not is_manifest(self.path):
            raise InvalidManifestError(
                f"{self.path} is not a {MANIFEST_FILE_NAME} file", path=self.path
            )
        manifest = _read_manifest(self.path)
        self.name = _resolve_name(self.path, manifest)
        self.size = artifact_size(self.dir / ARTIFACT_DIR_NAME)

    @classmethod
    def of(cls, path: PathLike | str, name: Name, size: int | None) -> "Project":
        """Build a project from known values without touching the filesystem."""
        project = cls.__new__(cls)
        project.path = pathlib.Path(path)
        if not is_manifest(project.path):
            raise InvalidManifestError(
                f"{project.path} is not a {MANIFEST_FILE_NAME} file", path=project.path
            )
        project.name = name
        project.size = size
        return project

    @property
    def dir(self) -> pathlib.Path:
        """Directory containing the manifest."""
        return self.path.parent

    @property
    def target_dir(self) -> pathlib.Path:
        return self.dir / ARTIFACT_DIR_NAME

    @property
    def sort_key(self) -> tuple[bool, int, str]:
        return self.size is not None, self.size or 0, str(self.path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "name": self.name.to_dict(),
            "size": self.size,
        }

    def __eq__(self, other):
        if not isinstance(other, Project):
            return NotImplemented
        return self.path == other.path

    def __lt__(self, other):
        if not isinstance(other, Project):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __hash__(self):
        return hash(self.path)

    def __str__(self):
        return f"{sizes.format_size(self.size)} {self.name} @ {self.dir}"

    def __repr__(self):
        return (
            f"{Project.__name__}(path={str(self.path)!r} "
            f"name={self.name!r} size={self.size!r})"
        )


def _read_manifest(path: pathlib.Path) -> dict[str, Any]:
    try:
        manifest_text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestReadError(f"Failed to read {path}: {e}", path=path) from e
    try:
        return tomlkit.parse(manifest_text).unwrap()
    except TOMLKitError as e:
        raise ManifestParseError(f"Failed to parse {path}: {e}", path=path) from e


def _resolve_name(path: pathlib.Path, manifest: dict[str, Any]) -> Name:
    package_name = utils.mapping_get(manifest, "package", "name")
    if isinstance(package_name, str) and package_name:
        return Name.explicit(package_name)
    parent = path.parent
    if not parent.name:
        # relative manifests like "Cargo.toml" have a parent of "."
        try:
            parent = path.absolute().parent
        except OSError as e:
            raise NameResolutionError(
                f"Failed to resolve parent directory for {path}: {e}", path=path
            ) from e
    if not parent.name:
        raise NameResolutionError(
            f"Failed to find name field or parent directory for {path}", path=path
        )
    return Name.inferred(parent.name)
