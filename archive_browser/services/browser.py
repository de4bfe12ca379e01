"""Directory browser driven only through the filesystem capability interface."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import Iterator

from verboselogs import VerboseLogger

from archive_browser.filesystem.base import FileSystem

DEFAULT_PREVIEW_CHARS = 1000


@dataclass(frozen=True)
class BrowserEntry:
    """One row of a directory listing."""

    path: PurePath
    name: str
    is_dir: bool


class DirectoryBrowser:
    """Navigation state of a file browser.

    The browser never looks at what backs the filesystem: a real disk and an
    archive are driven the same way.
    """

    def __init__(
        self,
        filesystem: FileSystem,
        logger: VerboseLogger,
        show_hidden: bool = False,
        start: PurePath | str | None = None,
    ) -> None:
        self.filesystem = filesystem
        self.logger = logger
        self.show_hidden = show_hidden
        self.root = filesystem.current_dir()
        self.current = self.root
        self.selected: PurePath | None = None

        if start:
            self.change_dir(start)

    def resolve(self, target: PurePath | str) -> PurePath:
        """Resolve ``target`` against the current directory.

        A leading ``/`` starts from the browser root, ``..`` goes up one
        level and never above the root.
        """
        text = target.as_posix() if isinstance(target, PurePath) else str(target)
        path = self.root if text.startswith("/") else self.current

        for segment in text.split("/"):
            if segment in ("", "."):
                continue
            if segment == "..":
                if path != self.root:
                    path = path.parent
                continue
            path = path / segment
        return path

    def _entry(self, path: PurePath) -> BrowserEntry:
        return BrowserEntry(path, path.name, self.filesystem.is_dir(path))

    def _list(self, directory: PurePath) -> list[BrowserEntry]:
        rows = [
            self._entry(path)
            for path in self.filesystem.read_dir(directory)
            if self.show_hidden or not self.filesystem.is_path_hidden(path)
        ]
        rows.sort(key=lambda row: (not row.is_dir, row.name.casefold(), row.name))
        return rows

    def entries(self) -> list[BrowserEntry]:
        """List the current directory, directories first, then by name."""
        return self._list(self.current)

    def change_dir(self, target: PurePath | str) -> PurePath:
        """Enter a directory.

        Raises
        ------
        NotADirectoryError
            If ``target`` is not a directory.

        """
        path = self.resolve(target)
        if not self.filesystem.is_dir(path):
            raise NotADirectoryError(f"Not a directory: '{target}'")

        self.logger.debug(f"Entering '{path}'.")
        self.current = path
        self.selected = None
        return path

    def up(self) -> PurePath:
        """Go to the parent directory; stays put at the root."""
        if self.current != self.root:
            self.current = self.current.parent
            self.selected = None
        return self.current

    def select(self, name: PurePath | str) -> PurePath:
        """Pick a file.

        Raises
        ------
        FileNotFoundError
            If ``name`` is not a file.

        """
        path = self.resolve(name)
        if not self.filesystem.is_file(path):
            raise FileNotFoundError(f"No such file: '{name}'")

        self.logger.debug(f"Selected '{path}'.")
        self.selected = path
        return path

    def shortcuts(self) -> list[tuple[str, PurePath]]:
        """Return the user folders and volumes the filesystem offers."""
        shortcuts: list[tuple[str, PurePath]] = []

        user_dirs = self.filesystem.user_dirs(canonicalize=True)
        if user_dirs is not None:
            for label, path in vars(user_dirs).items():
                if path is not None:
                    shortcuts.append((label.capitalize(), path))

        for disk in self.filesystem.get_disks(canonicalize=True):
            shortcuts.append((disk.display_name, disk.mount_point))

        return shortcuts

    def preview(self, name: PurePath | str, max_chars: int = DEFAULT_PREVIEW_CHARS) -> str:
        """Return the start of a text file.

        Raises
        ------
        OSError
            If the filesystem cannot preview the file.

        """
        return self.filesystem.load_text_file_preview(self.resolve(name), max_chars)

    def make_dir(self, name: PurePath | str) -> PurePath:
        """Create a directory below the current one.

        Raises
        ------
        OSError
            If the filesystem cannot create it.

        """
        path = self.resolve(name)
        self.filesystem.create_dir(path)
        return path

    def walk(self) -> Iterator[tuple[int, BrowserEntry]]:
        """Yield ``(depth, entry)`` for everything below the current directory."""
        yield from self._walk(self.current, 0)

    def _walk(self, directory: PurePath, depth: int) -> Iterator[tuple[int, BrowserEntry]]:
        for row in self._list(directory):
            yield depth, row
            if row.is_dir:
                yield from self._walk(row.path, depth + 1)
