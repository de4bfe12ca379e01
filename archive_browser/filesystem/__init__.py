"""Filesystem capability interface and its archive implementation."""
from .archive import ArchiveFileSystem
from .base import Disk, FileSystem, Metadata, UserDirectories

__all__ = [
    "ArchiveFileSystem",
    "Disk",
    "FileSystem",
    "Metadata",
    "UserDirectories",
]
