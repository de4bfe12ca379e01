"""Module that contains data models."""
from .archive_index import ArchiveIndex, EntryInfo
from .entry_path import normalize_path

__all__ = [
    "ArchiveIndex",
    "EntryInfo",
    "normalize_path",
]
