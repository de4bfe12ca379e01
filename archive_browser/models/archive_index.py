"""In-memory index of the member names stored in an archive."""
from __future__ import annotations

import lzma
import struct
import zlib
from dataclasses import dataclass
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Iterator
from zipfile import BadZipFile, LargeZipFile, ZipFile, is_zipfile

import py7zr
import rarfile
from py7zr import SevenZipFile
from py7zr.exceptions import (
    ArchiveError,
    Bad7zFile,
    CrcError,
    DecompressionError,
    PasswordRequired,
    UnsupportedCompressionMethodError,
)
from rarfile import RarFile
from verboselogs import VerboseLogger

from archive_browser.errors import DecodeError
from .entry_path import SEPARATOR, normalize_path

ArchiveFormatType = str

ZIP_FORMAT: ArchiveFormatType = "zip"
SEVEN_ZIP_FORMAT: ArchiveFormatType = "7z"
RAR_FORMAT: ArchiveFormatType = "rar"

# Exceptions the archive libraries raise on malformed input.
ZIP_ERRORS = (
    BadZipFile,
    LargeZipFile,
    NotImplementedError,
    RuntimeError,
    EOFError,
    zlib.error,
    lzma.LZMAError,
    OSError,
    ValueError,
)
SEVEN_ZIP_ERRORS = (
    Bad7zFile,
    ArchiveError,
    CrcError,
    DecompressionError,
    PasswordRequired,
    UnsupportedCompressionMethodError,
    EOFError,
    lzma.LZMAError,
    OSError,
    ValueError,
    KeyError,
    IndexError,
    TypeError,
    AttributeError,
    OverflowError,
    struct.error,
)
RAR_ERRORS = (rarfile.Error, EOFError, OSError, ValueError)

logger = VerboseLogger(__name__)


@dataclass(frozen=True)
class EntryInfo:
    """What an archive records about one member.

    Attributes
    ----------
    size : int, optional
        Uncompressed size in bytes.
    modified : datetime.datetime, optional
        Last modification time, when the archive stores a valid one.
    """

    size: int | None = None
    modified: datetime | None = None


@dataclass(frozen=True)
class RawMember:
    """A member as listed by an archive library, before normalization."""

    name: str
    is_dir: bool
    info: EntryInfo


def _date_time(value: tuple[int, ...] | None) -> datetime | None:
    """Convert a ``(Y, M, D, h, m, s)`` tuple, ignoring invalid DOS dates."""
    if not value:
        return None
    try:
        return datetime(*value[:6])
    except (TypeError, ValueError):
        return None


def detect_format(buffer: BytesIO, filename: str | None = None) -> ArchiveFormatType:
    """Guess the archive format from its magic bytes, then its suffix.

    Raises
    ------
    archive_browser.errors.DecodeError
        If neither the content nor the filename identify a handled format.

    """
    checks = (
        (ZIP_FORMAT, is_zipfile),
        (SEVEN_ZIP_FORMAT, py7zr.is_7zfile),
        (RAR_FORMAT, rarfile.is_rarfile),
    )
    for archive_format, check in checks:
        buffer.seek(0)
        try:
            if check(buffer):
                return archive_format
        except (OSError, ValueError, rarfile.Error):
            continue
        finally:
            buffer.seek(0)

    match Path(filename or "").suffix.lower():
        case ".zip":
            return ZIP_FORMAT
        case ".7z":
            return SEVEN_ZIP_FORMAT
        case ".rar":
            return RAR_FORMAT
        case other_ext:
            raise DecodeError(
                f"Unrecognized archive format{f' ({other_ext})' if other_ext else ''}."
            )


def _read_zip(
    buffer: BytesIO, password: str | None, verify: bool
) -> list[RawMember]:
    try:
        with ZipFile(buffer) as archive:
            if password:
                archive.setpassword(password.encode())
            if verify:
                bad_member = archive.testzip()
                if bad_member is not None:
                    raise DecodeError(f"Corrupt data in member '{bad_member}'.")
            return [
                RawMember(
                    info.filename,
                    info.is_dir(),
                    EntryInfo(info.file_size, _date_time(info.date_time)),
                )
                for info in archive.infolist()
            ]
    except ZIP_ERRORS as err:
        raise DecodeError(f"Invalid ZIP archive: {err}") from err


def _read_7z(
    buffer: BytesIO, password: str | None, verify: bool
) -> list[RawMember]:
    try:
        with SevenZipFile(buffer, mode="r", password=password) as archive:
            members = [
                RawMember(
                    info.filename,
                    info.is_directory,
                    EntryInfo(
                        getattr(info, "uncompressed", None),
                        getattr(info, "creationtime", None),
                    ),
                )
                for info in archive.list()
            ]
            if verify:
                bad_member = archive.testzip()
                if bad_member is not None:
                    raise DecodeError(f"Corrupt data in member '{bad_member}'.")
            return members
    except SEVEN_ZIP_ERRORS as err:
        raise DecodeError(f"Invalid 7-Zip archive: {err}") from err


def _read_rar(
    buffer: BytesIO, password: str | None, verify: bool
) -> list[RawMember]:
    # Member data checks need the external unrar tool, headers are enough here.
    try:
        with RarFile(buffer) as archive:
            if password:
                archive.setpassword(password)
            return [
                RawMember(
                    info.filename,
                    info.is_dir(),
                    EntryInfo(info.file_size, _date_time(info.date_time)),
                )
                for info in archive.infolist()
            ]
    except RAR_ERRORS as err:
        raise DecodeError(f"Invalid RAR archive: {err}") from err


READERS = {
    ZIP_FORMAT: _read_zip,
    SEVEN_ZIP_FORMAT: _read_7z,
    RAR_FORMAT: _read_rar,
}


class ArchiveIndex:
    """Immutable set of the entry paths stored in an archive.

    The index is built once from an in-memory buffer and never changes
    afterwards, so it can be shared between threads without locking.
    Directory records are not kept: directories are derived from entry paths.
    """

    def __init__(
        self,
        entries: dict[str, EntryInfo],
        archive_format: ArchiveFormatType,
    ) -> None:
        self._entries = dict(entries)
        self._names = tuple(self._entries)
        self._directories = frozenset(
            name[:end]
            for name in self._names
            for end, char in enumerate(name)
            if char == SEPARATOR
        )
        self._format = archive_format

    @classmethod
    def open(
        cls,
        data: bytes,
        filename: str | None = None,
        password: str | None = None,
        verify: bool = True,
        logger: VerboseLogger = logger,
    ) -> ArchiveIndex:
        """Decode an archive buffer into an index.

        Parameters
        ----------
        data : bytes
            The whole archive.
        filename : str, optional
            Original file name, used when the content does not reveal the
            format.
        password : str, optional
            If applicable, the password required to open the archive.
        verify : bool, optional
            Check member data (ZIP and 7-Zip) so corrupt archives fail here.
        logger : verboselogs.VerboseLogger, optional
            Receives skipped and duplicated member reports.

        Returns
        -------
        archive_browser.models.archive_index.ArchiveIndex

        Raises
        ------
        archive_browser.errors.DecodeError
            If the buffer is empty, truncated, corrupt, encrypted without the
            right password, uses an unsupported compression method or is not
            an archive at all.

        """
        if not data:
            raise DecodeError("Empty buffer.")

        with BytesIO(data) as buffer:
            archive_format = detect_format(buffer, filename)
            members = READERS[archive_format](buffer, password, verify)

        entries: dict[str, EntryInfo] = {}
        for member in members:
            if member.is_dir:
                logger.spam(f"Skipping directory record '{member.name}'.")
                continue

            name = normalize_path(member.name)
            if not name:
                logger.verbose(f"Skipping member with invalid name '{member.name}'.")
                continue
            if name in entries:
                logger.debug(f"Duplicate member '{name}', keeping the last one.")

            entries[name] = member.info

        logger.debug(
            f"Indexed {len(entries)} entries ({archive_format}, "
            f"{len(members)} members)."
        )
        return cls(entries, archive_format)

    @property
    def format(self) -> ArchiveFormatType:
        """Format the index was decoded from."""
        return self._format

    def entry_exists(self, name: str) -> bool:
        """Return whether ``name`` exactly matches a stored entry path."""
        normalized = normalize_path(name)
        return bool(normalized) and normalized in self._entries

    def directory_exists(self, name: str) -> bool:
        """Return whether ``name`` is a proper ancestor of a stored entry path."""
        normalized = normalize_path(name)
        return bool(normalized) and normalized in self._directories

    def all_entry_names(self) -> Iterator[str]:
        """Yield every entry path. Call again to restart."""
        return iter(self._names)

    def entry_info(self, name: str) -> EntryInfo | None:
        """Return what the archive records about an exact entry."""
        normalized = normalize_path(name)
        if not normalized:
            return None
        return self._entries.get(normalized)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.entry_exists(name)

    def __iter__(self) -> Iterator[str]:
        return self.all_entry_names()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(format={self._format!r}, entries={len(self)})"
