"""Browse the contents of an archive from the command line."""
from __future__ import annotations

import sys
from argparse import Namespace
from dataclasses import asdict
from pathlib import PurePath
from typing import Any, Callable, Sequence

from dependency_injector.wiring import Provide, inject
from verboselogs import VerboseLogger

from archive_browser.config import Settings
from archive_browser.containers import AppContainer
from archive_browser.errors import DecodeError
from archive_browser.filesystem.base import FileSystem
from archive_browser.helpers import dump_to_file, parse_options
from archive_browser.models.entry_path import normalize_path
from archive_browser.services.archive_loader import ArchiveLoader
from archive_browser.services.browser import DirectoryBrowser
from archive_browser.services.state_store import BrowserStateStore, archive_key

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def format_listing(browser: DirectoryBrowser, tree: bool = False) -> list[str]:
    """Render the current directory, or everything below it, as text lines."""
    if tree:
        return [
            f"{'    ' * depth}{row.name}{'/' if row.is_dir else ''}"
            for depth, row in browser.walk()
        ]
    return [f"{row.name}{'/' if row.is_dir else ''}" for row in browser.entries()]


def format_metadata(filesystem: FileSystem, path: PurePath) -> list[str]:
    """Render the metadata of one path as ``key: value`` lines."""
    metadata = filesystem.metadata(path)
    kind = "directory" if filesystem.is_dir(path) else "file"
    lines = [f"path: {path}", f"type: {kind}"]

    for key, value in asdict(metadata).items():
        if value is not None:
            lines.append(f"{key}: {value}")
    return lines


def listing_payload(browser: DirectoryBrowser, filename: str, tree: bool) -> dict[str, Any]:
    """Build the JSON document written by ``--dump-json``."""
    if tree:
        entries = [{"depth": depth, **asdict(row)} for depth, row in browser.walk()]
    else:
        entries = [{"depth": 0, **asdict(row)} for row in browser.entries()]

    return {"archive": filename, "path": normalize_path(browser.current), "entries": entries}


@inject
def main(
    args: Namespace,
    archive_loader: ArchiveLoader = Provide[AppContainer.archive_loader],
    state_store: BrowserStateStore = Provide[AppContainer.state_store],
    browser_factory: Callable[..., DirectoryBrowser] = Provide[AppContainer.browser.provider],
    logger: VerboseLogger = Provide[AppContainer.logger],
    settings: Settings = Provide[AppContainer.config],
) -> int:
    """Program's entrypoint. Returns the process exit status."""
    try:
        filesystem = archive_loader.load_path(args.filename, args.password)

    except DecodeError as err:
        logger.error(f"Failed decoding {args.filename}: {err}")
        return EXIT_FAILURE

    except (
        FileNotFoundError,
        OSError,
        PermissionError,
    ) as err:
        logger.error(f"Failed reading {args.filename}: {err}")
        return EXIT_FAILURE

    key = archive_key(args.filename)
    browser = browser_factory(filesystem=filesystem)

    start = args.path
    restoring = start is None and settings.restore_last_path and not args.no_restore
    if restoring:
        start = state_store.load_last_path(key)

    if start:
        try:
            browser.change_dir(start)
        except NotADirectoryError as err:
            if not restoring:
                logger.error(f"Failed opening {start}: {err}")
                return EXIT_FAILURE
            logger.warning(f"Last path is gone, starting at the root: {err}")

    if args.stat:
        path = browser.resolve(args.stat)
        if not (filesystem.is_file(path) or filesystem.is_dir(path)):
            logger.error(f"No such path in {args.filename}: '{args.stat}'")
            return EXIT_FAILURE
        lines = format_metadata(filesystem, path)
    else:
        lines = format_listing(browser, tree=args.tree)

    for line in lines:
        print(line)

    if args.dump_json and not args.stat:
        dump_to_file(logger, args.dump_json, listing_payload(browser, args.filename, args.tree))

    state_store.save_last_path(key, browser.current)
    return EXIT_SUCCESS


def run(argv: Sequence[str] | None = None) -> int:
    """Console script entrypoint."""
    args: Namespace = parse_options("Browse the contents of an archive.", argv)

    app_container = AppContainer()
    app_container.verbosity.override(args.verbose)
    app_container.wire(modules=[__name__])
    app_container.init_resources()
    try:
        return main(args)
    finally:
        app_container.shutdown_resources()
        app_container.unwire()


if __name__ == "__main__":
    sys.exit(run())
