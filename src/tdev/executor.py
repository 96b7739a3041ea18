"""
Runs tmux commands, or records them when in dry-run mode.

Normal mode goes through libtmux (``Server.cmd``), which spawns tmux, waits for
it and captures its output. ``attach`` is the exception: it needs the
invoking terminal, so it runs tmux with inherited stdio.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from typing import List, Optional

import libtmux
from libtmux import exc as tmux_exc

from tdev.exc import CommandError

logger = logging.getLogger(__name__)


class TmuxExecutor:
    """Synchronous tmux command runner with an optional dry-run call log."""

    def __init__(self, dry_run: bool = False, socket_name: Optional[str] = None) -> None:
        self.dry_run = dry_run
        self.socket_name = socket_name
        self.calls: List[str] = []
        self._server: Optional[libtmux.Server] = None

    @property
    def server(self) -> libtmux.Server:
        if self._server is None:
            self._server = libtmux.Server(socket_name=self.socket_name)
        return self._server

    def _argv(self, args: tuple) -> List[str]:
        argv = ["tmux"]
        if self.socket_name:
            argv.append(f"-L{self.socket_name}")
        argv += [str(a) for a in args]
        return argv

    def _record(self, args: tuple) -> None:
        self.calls.append("$> " + shlex.join(self._argv(args)))

    def run(self, *args: str) -> None:
        """! @brief Run `tmux <args>` and wait for it.

        @param args tmux subcommand and its arguments.
        @throws CommandError if tmux is missing, cannot be spawned, or exits non-zero.
        """
        if self.dry_run:
            self._record(args)
            return

        argv = self._argv(args)
        logger.debug(f"running {shlex.join(argv)}")
        try:
            proc = self.server.cmd(*args)
        except tmux_exc.TmuxCommandNotFound as e:
            raise CommandError(argv, reason="tmux not found in PATH") from e
        except OSError as e:
            raise CommandError(argv, reason=str(e)) from e

        if proc.returncode != 0:
            raise CommandError(argv, returncode=proc.returncode, stderr=proc.stderr)

    def has_session(self, name: str) -> bool:
        """! @brief Check whether a session with exactly this name is live.

        In dry-run mode the query is recorded and answered with False, so the
        log shows everything a fresh build would do.

        @param name Session name.
        @return True if the session exists.
        """
        args = ("has-session", "-t", f"={name}")
        if self.dry_run:
            self._record(args)
            return False
        try:
            self.run(*args)
        except CommandError as e:
            logger.debug(f"no session {name!r}: {e}")
            return False
        return True

    def attach(self, name: str) -> int:
        """! @brief Attach the invoking terminal to a session.

        Blocks for as long as the client stays attached.

        @param name Session name.
        @return tmux exit code (0 in dry-run mode).
        @throws CommandError if tmux cannot be spawned.
        """
        args = ("attach-session", "-t", name)
        if self.dry_run:
            self._record(args)
            return 0

        argv = self._argv(args)
        tmux_bin = shutil.which("tmux")
        if not tmux_bin:
            raise CommandError(argv, reason="tmux not found in PATH")
        logger.debug(f"running {shlex.join(argv)}")
        try:
            # stdin/stdout/stderr are inherited from this process
            result = subprocess.run([tmux_bin] + argv[1:])
        except OSError as e:
            raise CommandError(argv, reason=str(e)) from e
        return result.returncode

    def format_calls(self) -> str:
        return "\n".join(self.calls)
