"""Browse archives as read-only directory trees."""
from .errors import ArchiveBrowserError, DecodeError, Unsupported
from .filesystem import ArchiveFileSystem, FileSystem
from .models import ArchiveIndex

__version__ = "1.0.0"

__all__ = [
    "ArchiveBrowserError",
    "ArchiveFileSystem",
    "ArchiveIndex",
    "DecodeError",
    "FileSystem",
    "Unsupported",
]
