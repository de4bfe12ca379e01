"""Filesystem capability interface used by the directory browser."""
from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePath

PathType = str | os.PathLike[str]


@dataclass(frozen=True)
class Metadata:
    """Class defining what a filesystem reports about one path.

    Attributes
    ----------
    size : int, optional
        Size in bytes, for files.
    created : datetime.datetime, optional
        Creation time.
    last_modified : datetime.datetime, optional
        Last modification time.
    last_accessed : datetime.datetime, optional
        Last access time.
    """

    size: int | None = None
    created: datetime | None = None
    last_modified: datetime | None = None
    last_accessed: datetime | None = None


@dataclass(frozen=True)
class Disk:
    """A storage volume the browser can offer as a shortcut."""

    mount_point: PurePath
    display_name: str
    is_removable: bool = False


@dataclass(frozen=True)
class UserDirectories:
    """Well-known user folders. Absent folders are ``None``."""

    home: PurePath | None = None
    audio: PurePath | None = None
    desktop: PurePath | None = None
    documents: PurePath | None = None
    downloads: PurePath | None = None
    pictures: PurePath | None = None
    videos: PurePath | None = None


class FileSystem(ABC):
    """
    Abstract base class for the storage a directory browser navigates.

    Every operation is abstract: implementations state explicitly which
    answers are empty and which are unsupported.
    """

    @abstractmethod
    def is_dir(self, path: PathType) -> bool:
        """Return whether ``path`` is a directory."""
        raise NotImplementedError

    @abstractmethod
    def is_file(self, path: PathType) -> bool:
        """Return whether ``path`` is a file."""
        raise NotImplementedError

    @abstractmethod
    def metadata(self, path: PathType) -> Metadata:
        """Return what is known about ``path``."""
        raise NotImplementedError

    @abstractmethod
    def read_dir(self, path: PathType) -> list[PurePath]:
        """Return the full paths of the immediate children of ``path``.

        Raises
        ------
        OSError
            If the implementation cannot list the directory.

        """
        raise NotImplementedError

    @abstractmethod
    def user_dirs(self, canonicalize: bool) -> UserDirectories | None:
        """Return the user's well-known folders, ``None`` if there are none."""
        raise NotImplementedError

    @abstractmethod
    def get_disks(self, canonicalize: bool) -> list[Disk]:
        """Return the mounted volumes."""
        raise NotImplementedError

    @abstractmethod
    def create_dir(self, path: PathType) -> None:
        """Create a directory.

        Raises
        ------
        OSError
            If the directory cannot be created.

        """
        raise NotImplementedError

    @abstractmethod
    def is_path_hidden(self, path: PathType) -> bool:
        """Return whether the browser should hide ``path`` by default."""
        raise NotImplementedError

    @abstractmethod
    def load_text_file_preview(self, path: PathType, max_chars: int) -> str:
        """Return up to ``max_chars`` characters of a text file.

        Raises
        ------
        OSError
            If the file cannot be read.

        """
        raise NotImplementedError

    @abstractmethod
    def current_dir(self) -> PurePath:
        """Return the directory the browser starts in."""
        raise NotImplementedError
