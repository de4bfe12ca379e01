from pathlib import PurePosixPath

import pytest

from archive_browser.errors import Unsupported
from archive_browser.filesystem.archive import ArchiveFileSystem
from archive_browser.filesystem.base import Disk, FileSystem, Metadata, UserDirectories
from archive_browser.models.archive_index import ArchiveIndex
from archive_browser.services.browser import BrowserEntry, DirectoryBrowser

from conftest import make_zip


class DictFileSystem(FileSystem):
    """Tiny in-memory filesystem, used to check the browser stays generic."""

    def __init__(self, files: set[str], dirs: set[str]):
        self.files = {PurePosixPath("/", f) for f in files}
        self.dirs = {PurePosixPath("/", d) for d in dirs} | {PurePosixPath("/")}

    def is_dir(self, path):
        return PurePosixPath(path) in self.dirs

    def is_file(self, path):
        return PurePosixPath(path) in self.files

    def metadata(self, path):
        return Metadata(size=0 if self.is_file(path) else None)

    def read_dir(self, path):
        path = PurePosixPath(path)
        return [p for p in self.files | self.dirs if p.parent == path and p != path]

    def user_dirs(self, canonicalize):
        return UserDirectories(
            home=PurePosixPath("/home/user"),
            downloads=PurePosixPath("/home/user/Downloads"),
        )

    def get_disks(self, canonicalize):
        return [Disk(PurePosixPath("/mnt/usb"), "USB stick", True)]

    def create_dir(self, path):
        self.dirs.add(PurePosixPath(path))

    def is_path_hidden(self, path):
        return PurePosixPath(path).name.startswith(".")

    def load_text_file_preview(self, path, max_chars):
        return "preview"[:max_chars]

    def current_dir(self):
        return PurePosixPath("/")


@pytest.fixture
def archive_browser(logger) -> DirectoryBrowser:
    index = ArchiveIndex.open(
        make_zip(
            {
                "Zeta.txt": b"",
                "alpha.txt": b"",
                "docs/readme.md": b"",
                "docs/api/index.md": b"",
                "Build/out.bin": b"",
                ".config/settings.json": b"",
            }
        )
    )
    return DirectoryBrowser(ArchiveFileSystem(index, logger=logger), logger=logger)


def rows(browser: DirectoryBrowser) -> list[str]:
    return [f"{row.name}{'/' if row.is_dir else ''}" for row in browser.entries()]


def test_entries_list_directories_first_then_by_name(archive_browser):
    assert rows(archive_browser) == [".config/", "Build/", "docs/", "alpha.txt", "Zeta.txt"]


def test_entries_carry_full_paths(archive_browser):
    archive_browser.change_dir("docs")

    assert archive_browser.entries() == [
        BrowserEntry(PurePosixPath("docs/api"), "api", True),
        BrowserEntry(PurePosixPath("docs/readme.md"), "readme.md", False),
    ]


def test_change_dir_and_up(archive_browser):
    assert archive_browser.change_dir("docs") == PurePosixPath("docs")
    assert archive_browser.change_dir("api") == PurePosixPath("docs/api")
    assert rows(archive_browser) == ["index.md"]

    assert archive_browser.up() == PurePosixPath("docs")
    assert archive_browser.up() == archive_browser.root
    assert archive_browser.up() == archive_browser.root


def test_change_dir_resolves_relative_and_absolute_targets(archive_browser):
    archive_browser.change_dir("docs/api")

    assert archive_browser.change_dir("..") == PurePosixPath("docs")
    assert archive_browser.change_dir("/Build") == PurePosixPath("Build")
    assert archive_browser.change_dir("../../..") == archive_browser.root
    assert archive_browser.change_dir("/") == archive_browser.root


def test_change_dir_rejects_files_and_missing_paths(archive_browser):
    with pytest.raises(NotADirectoryError):
        archive_browser.change_dir("alpha.txt")
    with pytest.raises(NotADirectoryError):
        archive_browser.change_dir("nowhere")

    assert archive_browser.current == archive_browser.root


def test_select_picks_files_only(archive_browser):
    archive_browser.change_dir("docs")

    assert archive_browser.select("readme.md") == PurePosixPath("docs/readme.md")
    assert archive_browser.selected == PurePosixPath("docs/readme.md")

    with pytest.raises(FileNotFoundError):
        archive_browser.select("api")

    archive_browser.up()
    assert archive_browser.selected is None


def test_start_directory(logger):
    index = ArchiveIndex.open(make_zip({"a/b/c.txt": b""}))
    browser = DirectoryBrowser(ArchiveFileSystem(index), logger=logger, start="a/b")

    assert browser.current == PurePosixPath("a/b")
    assert rows(browser) == ["c.txt"]


def test_walk_visits_the_whole_tree(archive_browser):
    archive_browser.change_dir("docs")

    walked = [(depth, row.path.as_posix()) for depth, row in archive_browser.walk()]
    assert walked == [
        (0, "docs/api"),
        (1, "docs/api/index.md"),
        (0, "docs/readme.md"),
    ]
    assert archive_browser.current == PurePosixPath("docs")


def test_archive_offers_no_shortcuts(archive_browser):
    assert archive_browser.shortcuts() == []


def test_archive_preview_and_make_dir_are_unsupported(archive_browser):
    with pytest.raises(Unsupported):
        archive_browser.preview("alpha.txt")
    with pytest.raises(OSError):
        archive_browser.make_dir("new")


def test_browser_drives_any_filesystem(logger):
    filesystem = DictFileSystem(
        files={"home/user/notes.txt", "home/user/.profile"},
        dirs={"home", "home/user", "home/user/Downloads"},
    )
    browser = DirectoryBrowser(filesystem, logger=logger)

    browser.change_dir("home/user")
    assert rows(browser) == ["Downloads/", "notes.txt"]

    browser.show_hidden = True
    assert rows(browser) == ["Downloads/", ".profile", "notes.txt"]

    assert browser.preview("notes.txt", 3) == "pre"
    assert browser.make_dir("new") == PurePosixPath("/home/user/new")
    assert filesystem.is_dir("/home/user/new")

    assert browser.shortcuts() == [
        ("Home", PurePosixPath("/home/user")),
        ("Downloads", PurePosixPath("/home/user/Downloads")),
        ("USB stick", PurePosixPath("/mnt/usb")),
    ]
