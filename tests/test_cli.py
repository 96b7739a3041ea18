"""Tests for the tdev command line."""

from __future__ import annotations

import pathlib
import subprocess
import textwrap
import typing as t

import libtmux
import pytest

from tdev import cli, paths

DEV_SESSION = """
name: dev
root: ~/proj
windows:
  - name: edit
    cmd: vim .
  - name: run
    cmd: go run .
"""


def write(tmp_path: pathlib.Path, body: str) -> pathlib.Path:
    path = tmp_path / "dev.yaml"
    path.write_text(textwrap.dedent(body))
    return path


@pytest.fixture
def no_spawn(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(*args: t.Any, **kwargs: t.Any) -> t.Any:
        raise AssertionError("tmux must not be spawned")

    monkeypatch.setattr(libtmux.Server, "cmd", boom)
    monkeypatch.setattr(subprocess, "run", boom)


def test_no_args_prints_usage(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([]) == 0
    assert "usage: tdev" in capsys.readouterr().out


def test_dry_run(
    tmp_path: pathlib.Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    no_spawn: None,
) -> None:
    monkeypatch.setattr(paths, "home_dir", lambda: "/home/tester")

    assert cli.main([str(write(tmp_path, DEV_SESSION)), "-d"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "Dry run:",
        "$> tmux has-session -t =dev",
        "$> tmux new-session -d -s dev -c /home/tester/proj -n main",
        "$> tmux rename-window -t dev:1 edit",
        "$> tmux send-keys -t dev:1.1 'vim .' C-m",
        "$> tmux new-window -t dev:2 -n run -c /home/tester/proj",
        "$> tmux send-keys -t dev:2.1 'go run .' C-m",
        "$> tmux select-window -t dev:1",
        "$> tmux attach-session -t dev",
    ]


def test_missing_config_is_fatal(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([str(tmp_path / "missing.yaml")]) == 1
    assert "error: Error reading config file" in capsys.readouterr().err


def test_invalid_config_is_fatal(
    tmp_path: pathlib.Path,
    capsys: pytest.CaptureFixture[str],
    no_spawn: None,
) -> None:
    assert cli.main([str(write(tmp_path, "windows: []\n")), "-d"]) == 1
    captured = capsys.readouterr()
    assert "Bad session name" in captured.err
    assert captured.out.splitlines() == ["Dry run:"]


def test_provision_failure_exit_code(
    tmp_path: pathlib.Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    def fake_cmd(server: libtmux.Server, cmd: str, *args: t.Any, **kwargs: t.Any) -> t.Any:
        code = 1 if cmd in ("has-session", "new-session") else 0
        return subprocess.CompletedProcess([cmd, *args], code, stdout=[], stderr=["duplicate session"])

    monkeypatch.setattr(libtmux.Server, "cmd", fake_cmd)

    assert cli.main([str(write(tmp_path, "name: dev\nroot: /srv\n"))]) == 1
    assert "Session creation failed" in capsys.readouterr().err


def test_index_note_printed(
    tmp_path: pathlib.Path,
    capsys: pytest.CaptureFixture[str],
    no_spawn: None,
) -> None:
    cli.main([str(write(tmp_path, "name: dev\nroot: /srv\n")), "-d"])
    assert cli.INDEX_NOTE in capsys.readouterr().err


def test_extra_arguments_ignored(
    tmp_path: pathlib.Path,
    capsys: pytest.CaptureFixture[str],
    caplog: pytest.LogCaptureFixture,
    no_spawn: None,
) -> None:
    config = str(write(tmp_path, "name: dev\nroot: /srv\n"))

    assert cli.main([config, "extra", "-d"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Dry run:"
    assert "$> tmux attach-session -t dev" in out
    assert "ignoring extra arguments: extra" in caplog.text
