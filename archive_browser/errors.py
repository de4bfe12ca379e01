"""Exceptions raised by archive-browser."""
from io import UnsupportedOperation


class ArchiveBrowserError(Exception):
    """Base class for archive-browser errors."""


class DecodeError(ArchiveBrowserError):
    """The buffer is not a readable archive.

    Raised once, while building an archive index. The caller may retry with
    another buffer.
    """


class Unsupported(ArchiveBrowserError, UnsupportedOperation):
    """The filesystem does not provide this operation.

    Subclasses ``io.UnsupportedOperation`` (an ``OSError``) so callers that
    already handle I/O errors also handle this one.
    """

    def __init__(self, operation: str, path: object = None) -> None:
        self.operation = operation
        self.path = path
        message = f"{operation} is not supported"
        if path is not None:
            message += f": '{path}'"
        super().__init__(message)
