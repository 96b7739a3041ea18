"""
Session file model.

A session file is YAML describing one tmux session::

    name: dev
    root: ~/proj
    windows:
      - name: edit
        cmd: vim .
      - name: run
        panes:
          - cmd: make watch
          - path: logs
            cmd: tail -f app.log
            horizontal: true
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from libtmux import exc as tmux_exc
from libtmux.common import session_check_name

from tdev.exc import ConfigError


def _str_field(data: Dict[str, Any], key: str, where: str) -> str:
    """! @brief Read an optional string field, treating null as empty.

    @param data Mapping to read from.
    @param key Field name.
    @param where Location used in error messages (e.g. "windows[2]").
    @return Field value, "" if missing.
    @throws ConfigError if the value is not a scalar string/number.
    """
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ConfigError(f"{where}.{key} must be a string, got {value!r}")
    return str(value)


def _list_field(data: Dict[str, Any], key: str, where: str) -> List[Dict[str, Any]]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"{where}.{key} must be a list, got {type(value).__name__}")
    for i, item in enumerate(value):
        if not isinstance(item, dict):
            raise ConfigError(f"{where}.{key}[{i}] must be a mapping, got {item!r}")
    return value


@dataclass
class PaneSpec:
    path: str = ""
    cmd: str = ""
    # split side-by-side (-h) instead of stacked (-v)
    horizontal: bool = False

    @staticmethod
    def from_dict(data: Dict[str, Any], where: str = "pane") -> "PaneSpec":
        horizontal = data.get("horizontal")
        if horizontal is None:
            horizontal = False
        if not isinstance(horizontal, bool):
            raise ConfigError(f"{where}.horizontal must be true or false, got {horizontal!r}")
        return PaneSpec(
            path=_str_field(data, "path", where),
            cmd=_str_field(data, "cmd", where),
            horizontal=horizontal,
        )


@dataclass
class WindowSpec:
    """A window; when ``panes`` is non-empty its own ``path``/``cmd`` are unused."""

    name: str = ""
    path: str = ""
    cmd: str = ""
    panes: List[PaneSpec] = field(default_factory=list)

    @staticmethod
    def from_dict(data: Dict[str, Any], where: str = "window") -> "WindowSpec":
        return WindowSpec(
            name=_str_field(data, "name", where),
            path=_str_field(data, "path", where),
            cmd=_str_field(data, "cmd", where),
            panes=[
                PaneSpec.from_dict(p, f"{where}.panes[{i}]")
                for i, p in enumerate(_list_field(data, "panes", where))
            ],
        )


@dataclass
class SessionSpec:
    name: str
    root: str = ""
    windows: List[WindowSpec] = field(default_factory=list)

    @staticmethod
    def from_dict(data: Any) -> "SessionSpec":
        """! @brief Build a session from decoded YAML.

        @param data Result of yaml.safe_load.
        @return Validated SessionSpec.
        @throws ConfigError on schema violations or a name tmux would reject.
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Session file must be a mapping, got {type(data).__name__}")

        name = _str_field(data, "name", "session")
        try:
            session_check_name(name)
        except tmux_exc.BadSessionName as e:
            raise ConfigError(str(e)) from e

        return SessionSpec(
            name=name,
            root=_str_field(data, "root", "session"),
            windows=[
                WindowSpec.from_dict(w, f"windows[{i}]")
                for i, w in enumerate(_list_field(data, "windows", "session"))
            ],
        )

    @staticmethod
    def from_yaml(path: Path) -> "SessionSpec":
        try:
            text = path.read_text()
        except OSError as e:
            raise ConfigError(f"Error reading config file: {e}") from e
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing session YAML: {e}") from e
        return SessionSpec.from_dict(data)


def load_session(path: Union[str, Path]) -> SessionSpec:
    """! @brief Load and validate a session file.

    @param path Path to the YAML file.
    @return Parsed SessionSpec.
    @throws ConfigError if the file is unreadable or invalid.
    """
    return SessionSpec.from_yaml(Path(path))
