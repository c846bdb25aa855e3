"""Shared fixtures for cargo-vanish tests."""

from __future__ import annotations

import pathlib
from typing import Callable

import pytest

from cargo_vanish import config


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Resolve settings from a clean environment for every test."""
    for key in (
        "CARGO_VANISH_DIRECTORY",
        "CARGO_VANISH_CARGO",
        "CARGO_VANISH_DELAY_MS",
        "CARGO",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    config.settings.cache_clear()
    yield
    config.settings.cache_clear()


def write_sparse(path: pathlib.Path, size: int):
    """Create a file with the given logical size without writing its bytes."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as fp:
        fp.truncate(size)


@pytest.fixture
def make_project(tmp_path: pathlib.Path) -> Callable[..., pathlib.Path]:
    """
    Factory creating a Cargo project beneath tmp_path.

    Args:
        relative: Project directory relative to tmp_path
        name: package.name to write, or None to omit the [package] name
        target: Mapping of file paths relative to target/ to sizes, or None
                for no target directory

    Returns:
        Path to the created Cargo.toml
    """

    def _make(
        relative: str,
        name: str | None = None,
        target: dict[str, int] | None = None,
    ) -> pathlib.Path:
        project_dir = tmp_path / relative
        project_dir.mkdir(parents=True, exist_ok=True)
        manifest = project_dir / "Cargo.toml"
        if name is None:
            manifest.write_text('[dependencies]\nserde = "1"\n')
        else:
            manifest.write_text(f'[package]\nname = "{name}"\nversion = "0.1.0"\n')
        if target is not None:
            (project_dir / "target").mkdir(exist_ok=True)
            for file_name, size in target.items():
                write_sparse(project_dir / "target" / file_name, size)
        return manifest

    return _make
