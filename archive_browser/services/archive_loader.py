"""Archive loading component."""
from __future__ import annotations

from pathlib import Path

from verboselogs import VerboseLogger

from archive_browser.config import Settings
from archive_browser.errors import DecodeError
from archive_browser.filesystem.archive import ArchiveFileSystem
from archive_browser.models.archive_index import ArchiveIndex


class ArchiveLoader:
    """Reads archives into memory and wraps them as filesystems."""

    def __init__(self, logger: VerboseLogger, settings: Settings | None = None):
        self.logger = logger
        self.settings = settings or Settings()

    def load_bytes(
        self,
        data: bytes,
        filename: str | None = None,
        password: str | None = None,
    ) -> ArchiveFileSystem:
        """Index an in-memory archive.

        Raises
        ------
        archive_browser.errors.DecodeError
            If the buffer is not a readable archive.

        """
        label = filename or "<buffer>"
        self.logger.verbose(f"Indexing {label} ({len(data)} bytes) ...")

        try:
            index = ArchiveIndex.open(
                data,
                filename=filename,
                password=password,
                verify=self.settings.verify_archive_data,
                logger=self.logger,
            )
        except DecodeError as err:
            self.logger.debug(f"Failed decoding {label}: {err}")
            raise

        self.logger.info(f"Loaded {label}: {len(index)} entries ({index.format}).")
        return ArchiveFileSystem(index, logger=self.logger)

    def load_path(
        self, path: str | Path, password: str | None = None
    ) -> ArchiveFileSystem:
        """Read an archive file from disk and index it.

        Raises
        ------
        archive_browser.errors.DecodeError
            If the file is larger than the configured limit or not a readable
            archive.
        FileNotFoundError, OSError, PermissionError
            If the file is not found or can't be read.

        """
        filepath = Path(path)
        size = filepath.stat().st_size

        if size > self.settings.max_archive_size:
            raise DecodeError(
                f"{filepath.name} is {size} bytes, more than the "
                f"{self.settings.max_archive_size} bytes limit."
            )

        with open(filepath, "rb") as file_handle:
            data = file_handle.read()

        return self.load_bytes(data, filename=filepath.name, password=password)
