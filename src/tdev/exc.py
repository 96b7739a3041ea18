"""Exceptions raised by tdev."""

from __future__ import annotations

from typing import List, Optional


class TdevError(Exception):
    """Base exception for all tdev errors."""


class ConfigError(TdevError):
    """Raised if the session file cannot be read, parsed or validated."""


class HomeDirError(TdevError):
    """Raised if the current user's home directory cannot be determined."""


class CommandError(TdevError):
    """Raised if a tmux command cannot be spawned or exits non-zero."""

    def __init__(
        self,
        cmd: List[str],
        returncode: Optional[int] = None,
        stderr: Optional[List[str]] = None,
        reason: Optional[str] = None,
    ) -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr or []
        msg = f"'{' '.join(cmd)}'"
        if reason is not None:
            msg += f": {reason}"
        elif returncode is not None:
            msg += f" exited with {returncode}"
        if self.stderr:
            msg += f" ({'; '.join(self.stderr)})"
        super().__init__(msg)


class ProvisionError(TdevError):
    """Raised if a step of building the tmux session fails."""

    def __init__(self, step: str, cause: Optional[Exception] = None) -> None:
        self.step = step
        msg = step if cause is None else f"{step}! {cause}"
        super().__init__(msg)
