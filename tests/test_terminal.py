"""Tests for terminal helpers."""

from __future__ import annotations

import io
import logging

from cargo_vanish import terminal, utils


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        return True


def test_is_interactive() -> None:
    assert terminal.is_interactive(_Tty())
    assert not terminal.is_interactive(io.StringIO())
    closed = _Tty()
    closed.close()
    assert not terminal.is_interactive(closed)


def test_colorize() -> None:
    assert terminal.colorize(terminal.Color.RED, "x", enabled=False) == "x"
    colored = terminal.colorize(terminal.Color.RED, "x")
    assert colored.startswith("\x1b[31m")
    assert colored.endswith("\x1b[0m")


def test_erase_sequence() -> None:
    assert terminal.erase_line() == "\x1b[1A\x1b[2K\r"


def test_transient_is_silent_when_not_interactive(capsys) -> None:
    terminal.transient("progress", interactive=False)
    terminal.erase(interactive=False)
    assert capsys.readouterr().out == ""


def test_mapping_get() -> None:
    data = {"package": {"name": "foo"}, "workspace": "x"}
    assert utils.mapping_get(data, "package", "name") == "foo"
    assert utils.mapping_get(data, "package", "version", default="0") == "0"
    assert utils.mapping_get(data, "workspace", "members") is None
    assert utils.mapping_get(None, "package") is None


def test_log_level() -> None:
    assert utils.log_level("debug") == logging.DEBUG
    assert utils.log_level(None) == logging.INFO
    assert utils.log_level("nope", default=-1) == -1
    assert utils.log_level(logging.ERROR) == logging.ERROR


def test_logger_is_named_after_module_file() -> None:
    assert utils.logger("/src/cargo_vanish/discover.py").name == "discover"
    assert utils.logger("clean.py").name == "clean"


def test_is_log_level() -> None:
    assert utils.is_log_level("warning")
    assert utils.is_log_level(" Error ")
    assert not utils.is_log_level("chatty")


def test_set_log_level() -> None:
    root = logging.getLogger()
    previous = root.level
    try:
        utils.set_log_level("debug")
        assert root.level == logging.DEBUG
        utils.set_log_level("unknown")
        assert root.level == logging.INFO
    finally:
        root.setLevel(previous)
