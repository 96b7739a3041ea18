"""Shared fixtures for tdev tests."""

from __future__ import annotations

import typing as t

import pytest

from tdev import paths
from tdev.exc import CommandError
from tdev.executor import TmuxExecutor

HOME = "/home/tester"


class RecordingExecutor(TmuxExecutor):
    """Executor that records tmux argument lists instead of spawning tmux."""

    def __init__(
        self,
        existing: t.Iterable[str] = (),
        fail_on: str | None = None,
        attach_code: int = 0,
        attach_error: bool = False,
    ) -> None:
        super().__init__()
        self.existing = set(existing)
        self.fail_on = fail_on
        self.attach_code = attach_code
        self.attach_error = attach_error
        self.commands: list[list[str]] = []

    def run(self, *args: str) -> None:
        self.commands.append(list(args))
        if args[0] == self.fail_on:
            raise CommandError(["tmux", *args], returncode=1, stderr=["boom"])

    def has_session(self, name: str) -> bool:
        self.commands.append(["has-session", "-t", f"={name}"])
        return name in self.existing

    def attach(self, name: str) -> int:
        self.commands.append(["attach-session", "-t", name])
        if self.attach_error:
            raise CommandError(["tmux", "attach-session", "-t", name], reason="no tty")
        return self.attach_code

    def subcommands(self) -> list[str]:
        return [c[0] for c in self.commands]


@pytest.fixture
def home(monkeypatch: pytest.MonkeyPatch) -> str:
    """Pin the home directory used by tdev.paths."""
    monkeypatch.setattr(paths, "home_dir", lambda: HOME)
    return HOME


@pytest.fixture
def make_executor() -> t.Callable[..., RecordingExecutor]:
    return RecordingExecutor
