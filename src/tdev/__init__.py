"""tdev: provision tmux sessions from YAML session files."""

from tdev.builder import SessionBuilder, SessionState
from tdev.config import PaneSpec, SessionSpec, WindowSpec, load_session
from tdev.executor import TmuxExecutor
from tdev.paths import expand, resolve

__version__ = "0.1.0"

__all__ = [
    "PaneSpec",
    "SessionBuilder",
    "SessionSpec",
    "SessionState",
    "TmuxExecutor",
    "WindowSpec",
    "expand",
    "load_session",
    "resolve",
]
