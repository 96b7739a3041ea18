"""
Translate a SessionSpec into tmux commands.

tmux starts every session with one window holding one pane, so the first
declared window only renames that window and the first pane of each window
never splits. Windows and panes are addressed 1-based
(``<session>:<window>`` and ``<session>:<window>.<pane>``), which assumes
``base-index`` and ``pane-base-index`` are set to 1.
"""

from __future__ import annotations

import enum
import logging
import os
from typing import Optional

from tdev.config import SessionSpec, WindowSpec
from tdev.exc import CommandError, ProvisionError
from tdev.executor import TmuxExecutor
from tdev.paths import expand, resolve

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_NAME = "main"


class SessionState(enum.Enum):
    ABSENT = "absent"
    CREATED = "created"
    WINDOWS_PROVISIONED = "windows-provisioned"
    ATTACHED = "attached"


class SessionBuilder:
    """! @brief Provision and attach one tmux session.

    An existing session with the same name is attached as-is; its layout is
    not compared with the session file.
    """

    def __init__(
        self,
        session: SessionSpec,
        executor: TmuxExecutor,
        cwd: Optional[str] = None,
    ) -> None:
        self.session = session
        self.executor = executor
        self.cwd = cwd
        self.root = ""
        self.state = SessionState.ABSENT

    @property
    def name(self) -> str:
        return self.session.name

    def _step(self, step: str, *args: str) -> None:
        try:
            self.executor.run(*args)
        except CommandError as e:
            raise ProvisionError(step, e) from e

    def provision(self) -> bool:
        """! @brief Create the session, its windows and panes.

        @return False if the session already existed and nothing was done.
        @throws ProvisionError if any tmux step fails; nothing is rolled back.
        """
        if self.executor.has_session(self.name):
            logger.info(f"session {self.name!r} already exists, attaching")
            return False

        self.root = expand(self.session.root)
        if not self.root:
            self.root = self.cwd or os.getcwd()

        self._step(
            "Session creation failed",
            "new-session", "-d", "-s", self.name, "-c", self.root, "-n", DEFAULT_WINDOW_NAME,
        )
        self.state = SessionState.CREATED

        for index, window in enumerate(self.session.windows, start=1):
            self.create_window(index, window)
            if window.panes:
                self.split_window(index, window)
            else:
                self.inject_cmd(index, 1, window.cmd)

        self._step("Select window failed", "select-window", "-t", f"{self.name}:1")
        self.state = SessionState.WINDOWS_PROVISIONED
        return True

    def create_window(self, index: int, window: WindowSpec) -> None:
        """! @brief Rename window 1 or create window @p index.

        The first window keeps the session root as its directory.
        """
        target = f"{self.name}:{index}"
        if index == 1:
            self._step("Failed to rename first window", "rename-window", "-t", target, window.name)
            return

        path = window.panes[0].path if window.panes else window.path
        self._step(
            "Window creation failed",
            "new-window", "-t", target, "-n", window.name, "-c", resolve(self.root, path),
        )

    def split_window(self, index: int, window: WindowSpec) -> None:
        for pane_index, pane in enumerate(window.panes, start=1):
            if pane_index > 1:
                side = "-h" if pane.horizontal else "-v"
                self._step(
                    "Split window failed",
                    "split-window", side,
                    "-t", f"{self.name}:{index}",
                    "-c", resolve(self.root, pane.path),
                )
            self.inject_cmd(index, pane_index, pane.cmd)

    def inject_cmd(self, window: int, pane: int, cmd: str) -> None:
        """! @brief Type @p cmd into a pane and press Enter; no-op when empty."""
        if not cmd:
            return
        self._step(
            "Inject command failed",
            "send-keys", "-t", f"{self.name}:{window}.{pane}", cmd, "C-m",
        )

    def attach(self) -> None:
        """Attach to the session; failures are logged, never raised."""
        try:
            code = self.executor.attach(self.name)
        except CommandError as e:
            logger.warning(f"Attach failed: {e}")
        else:
            if code != 0:
                logger.warning(f"tmux attach-session exited with {code}")
        self.state = SessionState.ATTACHED

    def run(self) -> bool:
        provisioned = self.provision()
        self.attach()
        return provisioned
