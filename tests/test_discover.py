"""Tests for project discovery."""

from __future__ import annotations

import logging
import os
import pathlib

import pytest

from cargo_vanish import discover
from cargo_vanish.errors import InvalidRootError
from cargo_vanish.terminal import ERASE


def _paths(projects) -> set[pathlib.Path]:
    return {p.path for p in projects}


class TestWalkManifests:
    def test_finds_nested_manifests(self, make_project, tmp_path) -> None:
        expected = {
            make_project("a"),
            make_project("a/b/c"),
            make_project("d"),
        }
        (tmp_path / "d" / "README.md").write_text("readme")
        assert set(discover.walk_manifests(tmp_path)) == expected

    def test_prunes_hidden_directories(self, make_project, tmp_path) -> None:
        visible = make_project("visible")
        hidden = make_project(".hidden/inner")
        make_project("visible/.cache/nested")
        assert set(discover.walk_manifests(tmp_path)) == {visible}
        assert hidden in set(discover.walk_manifests(tmp_path, include_hidden=True))

    def test_hidden_root_is_scanned(self, tmp_path) -> None:
        root = tmp_path / ".root"
        (root / "proj").mkdir(parents=True)
        manifest = root / "proj" / "Cargo.toml"
        manifest.write_text("")
        assert list(discover.walk_manifests(root)) == [manifest]

    def test_no_hidden_segment_below_root(self, make_project, tmp_path) -> None:
        for relative in ["a", ".a/b", "c/.d", "c/.d/e", "f/g/.h/i"]:
            make_project(relative)
        for manifest in discover.walk_manifests(tmp_path):
            segments = manifest.relative_to(tmp_path).parts[:-1]
            assert not any(s.startswith(".") for s in segments)

    def test_only_exact_file_name(self, tmp_path) -> None:
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "Cargo.toml.bak").write_text("")
        (tmp_path / "a" / "cargo.toml").write_text("")
        (tmp_path / "b").mkdir()
        (tmp_path / "b" / "Cargo.lock").write_text("")
        assert list(discover.walk_manifests(tmp_path)) == []

    def test_visits_in_sorted_order(self, make_project, tmp_path) -> None:
        for relative in ["c", "a", "b/z", "b/a"]:
            make_project(relative)
        found = [m.parent.relative_to(tmp_path).as_posix() for m in discover.walk_manifests(tmp_path)]
        assert found == ["a", "b/a", "b/z", "c"]

    @pytest.mark.skipif(
        hasattr(os, "geteuid") and os.geteuid() == 0,
        reason="permissions are not enforced for root",
    )
    def test_unreadable_directory_is_skipped(
        self, make_project, tmp_path, caplog: pytest.LogCaptureFixture
    ) -> None:
        readable = make_project("ok")
        make_project("locked/inner")
        locked = tmp_path / "locked"
        locked.chmod(0)
        try:
            with caplog.at_level(logging.WARNING):
                found = list(discover.walk_manifests(tmp_path))
        finally:
            locked.chmod(0o755)
        assert found == [readable]
        assert "Walk error" in caplog.text

    def test_scan_error_is_logged_and_walk_continues(
        self,
        make_project,
        tmp_path,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        first = make_project("a")
        make_project("broken/inner")
        last = make_project("z")
        real_scandir = os.scandir

        def _scandir(path=".", *args, **kwargs):
            if os.path.basename(os.fspath(path)) == "broken":
                raise PermissionError(13, "Permission denied", os.fspath(path))
            return real_scandir(path, *args, **kwargs)

        monkeypatch.setattr(os, "scandir", _scandir)
        with caplog.at_level(logging.WARNING):
            found = list(discover.walk_manifests(tmp_path))
        assert found == [first, last]
        assert "Walk error" in caplog.text
        assert "broken" in caplog.text


class TestDiscover:
    def test_builds_projects(self, make_project, tmp_path) -> None:
        a = make_project("a", name="alpha", target={"x": 10})
        b = make_project("b")
        projects = list(discover.discover(tmp_path))
        assert _paths(projects) == {a, b}
        sizes = {p.path: p.size for p in projects}
        assert sizes == {a: 10, b: None}

    def test_broken_manifest_is_skipped(
        self, make_project, tmp_path, caplog: pytest.LogCaptureFixture
    ) -> None:
        good = make_project("good")
        bad = tmp_path / "bad" / "Cargo.toml"
        bad.parent.mkdir()
        bad.write_text("[package\n")
        with caplog.at_level(logging.WARNING):
            projects = list(discover.discover(tmp_path))
        assert _paths(projects) == {good}
        assert "Skipping project" in caplog.text
        assert str(bad) in caplog.text

    def test_rerun_is_idempotent(self, make_project, tmp_path) -> None:
        for relative in ["a", "b", "c/d"]:
            make_project(relative, target={"f": 3})
        first = [p.path for p in discover.discover(tmp_path)]
        second = [p.path for p in discover.discover(tmp_path)]
        assert first == second

    def test_no_progress_when_not_interactive(
        self, make_project, tmp_path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        make_project("a")
        list(discover.discover(tmp_path, interactive=False))
        assert capsys.readouterr().out == ""

    def test_transient_progress(
        self, make_project, tmp_path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        make_project("a")
        make_project("b", target={"x": 2_000})
        list(discover.discover(tmp_path, interactive=True, delay=0))
        out = capsys.readouterr().out
        lines = out.split("\n")
        # first line is printed without erasing, later lines erase the previous one
        assert lines[0].endswith(f"<- {tmp_path / 'a'}")
        assert not lines[0].startswith(ERASE)
        assert lines[1].startswith(ERASE)
        assert lines[1].endswith(f"<- {tmp_path / 'b'}")
        # the last line is erased when the walk finishes
        assert out.endswith(ERASE)


class TestValidateRoot:
    def test_accepts_directory(self, tmp_path) -> None:
        assert discover.validate_root(tmp_path) == tmp_path

    def test_missing_root(self, tmp_path) -> None:
        with pytest.raises(InvalidRootError):
            discover.validate_root(tmp_path / "missing")

    def test_file_root(self, tmp_path) -> None:
        file = tmp_path / "file"
        file.write_text("")
        with pytest.raises(InvalidRootError):
            discover.validate_root(file)
