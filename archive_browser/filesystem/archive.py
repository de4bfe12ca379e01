"""Read-only filesystem view over the flat entry list of an archive."""
from __future__ import annotations

from pathlib import PurePosixPath

from verboselogs import VerboseLogger

from archive_browser.errors import Unsupported
from archive_browser.models.archive_index import ArchiveIndex
from archive_browser.models.entry_path import (
    ROOT,
    directory_prefix,
    first_segment,
    join_path,
    normalize_path,
)
from .base import Disk, FileSystem, Metadata, PathType, UserDirectories

logger = VerboseLogger(__name__)


class ArchiveFileSystem(FileSystem):
    """Present an archive index as a directory tree.

    Directories are not stored anywhere: a path is a directory when it is a
    whole-segment prefix of at least one entry path. The index is immutable,
    so every query is idempotent and safe to run from several threads.
    """

    def __init__(self, index: ArchiveIndex, logger: VerboseLogger = logger) -> None:
        self.index = index
        self.logger = logger

    def is_file(self, path: PathType) -> bool:
        return self.index.entry_exists(path)

    def is_dir(self, path: PathType) -> bool:
        base = normalize_path(path)
        if base is None:
            return False
        if base == ROOT:
            return True
        if self.index.entry_exists(base):
            return False
        return self.index.directory_exists(base)

    def read_dir(self, path: PathType) -> list[PurePosixPath]:
        """List the immediate children of a directory.

        Entries below ``path`` are cut down to their first segment after the
        prefix, so nested entries surface as one child directory.

        Returns
        -------
        list of pathlib.PurePosixPath
            Full paths of the children, sorted. Empty when ``path`` is not a
            directory.

        """
        base = normalize_path(path)
        if base is None:
            self.logger.spam(f"read_dir: '{path}' is outside the archive.")
            return []

        prefix = directory_prefix(base)
        children = {
            join_path(base, first_segment(name[len(prefix):]))
            for name in self.index.all_entry_names()
            if name.startswith(prefix) and len(name) > len(prefix)
        }
        self.logger.spam(f"read_dir: '{base}' has {len(children)} children.")
        return [PurePosixPath(child) for child in sorted(children)]

    def metadata(self, path: PathType) -> Metadata:
        info = self.index.entry_info(path)
        if info is None:
            return Metadata()
        return Metadata(size=info.size, last_modified=info.modified)

    def user_dirs(self, canonicalize: bool) -> UserDirectories | None:
        return None

    def get_disks(self, canonicalize: bool) -> list[Disk]:
        return []

    def create_dir(self, path: PathType) -> None:
        raise Unsupported("create_dir", path)

    def write_file(self, path: PathType, data: bytes) -> None:
        raise Unsupported("write_file", path)

    def remove(self, path: PathType) -> None:
        raise Unsupported("remove", path)

    def is_path_hidden(self, path: PathType) -> bool:
        return False

    def load_text_file_preview(self, path: PathType, max_chars: int) -> str:
        raise Unsupported("load_text_file_preview", path)

    def current_dir(self) -> PurePosixPath:
        return PurePosixPath(ROOT)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.index!r})"
