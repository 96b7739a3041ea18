"""Home-directory expansion and path joining against the session root."""

from __future__ import annotations

import logging
import os
import pwd
from pathlib import Path

from tdev.exc import HomeDirError

logger = logging.getLogger(__name__)

HOME_MARKER = "~/"


def home_dir() -> str:
    """! @brief Return the current user's home directory.

    Looks the user up in the password database first, then falls back to
    Path.home() (which consults $HOME).

    @return Home directory.
    @throws HomeDirError if the user cannot be resolved.
    """
    try:
        home = pwd.getpwuid(os.getuid()).pw_dir
    except KeyError:
        home = ""
    if home:
        return home
    try:
        return str(Path.home())
    except (KeyError, RuntimeError) as e:
        raise HomeDirError(f"Cannot determine home directory for uid {os.getuid()}: {e}") from e


def expand(path: str) -> str:
    """! @brief Replace a leading "~/" with the user's home directory.

    Any other path is returned unchanged. Existence is not checked.
    If the home directory cannot be determined a warning is logged and an
    empty home is used, so "~/x" becomes "x".

    @param path Path, possibly starting with "~/".
    @return Expanded path.
    """
    if not path.startswith(HOME_MARKER):
        return path
    try:
        home = home_dir()
    except HomeDirError as e:
        logger.warning(f"{e}; expanding {path!r} without it")
        home = ""
    return os.path.join(home, path[len(HOME_MARKER):])


def resolve(root: str, path: str) -> str:
    """! @brief Resolve a window/pane path against the session root.

    The fragment always stays under the root: a leading "/" is dropped
    before joining, and "~/" in the fragment is not expanded.

    @param root Already expanded session root.
    @param path Fragment from the session file; "" means the root itself.
    @return Joined, normalized and expanded path.
    """
    return expand(os.path.normpath(os.path.join(root, path.lstrip("/"))))
