import warnings
from io import BytesIO
from zipfile import ZIP_DEFLATED, ZIP_STORED, ZipFile, ZipInfo

import pytest

from archive_browser.filesystem.archive import ArchiveFileSystem
from archive_browser.helpers import init_logger
from archive_browser.models.archive_index import ArchiveIndex

SAMPLE_ENTRIES = {
    "a/b.txt": b"abc",
    "a/c/d.txt": b"nested",
    "e.txt": b"top level",
}


def make_zip(entries: dict[str, bytes], compression: int = ZIP_DEFLATED) -> bytes:
    """Build a ZIP archive in memory. Names ending in '/' become directory records."""
    buffer = BytesIO()
    with warnings.catch_warnings():
        # Duplicate names are written on purpose by some tests.
        warnings.simplefilter("ignore", UserWarning)
        with ZipFile(buffer, "w", compression=compression) as archive:
            for name, data in entries.items():
                info = ZipInfo(name, date_time=(2024, 5, 17, 12, 30, 0))
                info.compress_type = ZIP_STORED if name.endswith("/") else compression
                archive.writestr(info, data)
    return buffer.getvalue()


def make_zip_members(members: list[tuple[str, bytes]]) -> bytes:
    """Like make_zip, but keeps repeated names."""
    buffer = BytesIO()
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UserWarning)
        with ZipFile(buffer, "w", compression=ZIP_STORED) as archive:
            for name, data in members:
                archive.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture
def logger():
    return init_logger("test", "INFO")


@pytest.fixture
def sample_zip() -> bytes:
    return make_zip(SAMPLE_ENTRIES)


@pytest.fixture
def sample_fs(sample_zip: bytes, logger) -> ArchiveFileSystem:
    return ArchiveFileSystem(ArchiveIndex.open(sample_zip, logger=logger), logger=logger)


@pytest.fixture
def empty_fs(logger) -> ArchiveFileSystem:
    return ArchiveFileSystem(ArchiveIndex.open(make_zip({}), logger=logger), logger=logger)
