"""Persistence of the browser's last visited path."""
from __future__ import annotations

from json import JSONDecodeError, loads
from pathlib import Path, PurePath
from typing import Any

from verboselogs import VerboseLogger

from archive_browser.helpers import dump_to_file

LAST_PATHS_KEY = "last_paths"


def archive_key(filename: str | Path) -> str:
    """Return the key an archive's state is stored under."""
    return str(Path(filename).expanduser().resolve())


class BrowserStateStore:
    """JSON file mapping each archive to the last path browsed inside it.

    A missing or damaged state file is not an error: the browser simply
    starts at the archive root.
    """

    def __init__(self, path: str | Path, logger: VerboseLogger) -> None:
        self.path = Path(path).expanduser()
        self.logger = logger

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            state = loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, JSONDecodeError) as err:
            self.logger.warning(f"Ignoring unreadable state file '{self.path}': {err}")
            return {}

        if not isinstance(state, dict):
            self.logger.warning(f"Ignoring malformed state file '{self.path}'.")
            return {}
        return state

    def load_last_path(self, key: str) -> str | None:
        """Return the last path saved for ``key``, if any."""
        last_paths = self._read().get(LAST_PATHS_KEY)
        if not isinstance(last_paths, dict):
            return None

        value = last_paths.get(key)
        return value if isinstance(value, str) else None

    def save_last_path(self, key: str, path: str | PurePath) -> bool:
        """Remember ``path`` for ``key``. Returns whether the file was written."""
        state = self._read()
        last_paths = state.get(LAST_PATHS_KEY)
        if not isinstance(last_paths, dict):
            last_paths = {}

        last_paths[key] = path.as_posix() if isinstance(path, PurePath) else str(path)
        state[LAST_PATHS_KEY] = last_paths
        return dump_to_file(self.logger, self.path, state)
