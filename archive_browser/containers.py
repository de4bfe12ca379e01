"""Dependency injection containers for the archive-browser application."""

from __future__ import annotations

from dependency_injector import containers, providers

from archive_browser.config import Settings
from archive_browser.helpers import init_logger
from archive_browser.services.archive_loader import ArchiveLoader
from archive_browser.services.browser import DirectoryBrowser
from archive_browser.services.state_store import BrowserStateStore


class AppContainer(containers.DeclarativeContainer):
    """Main application container."""

    config = providers.Singleton(Settings)

    # -v count from the command line, overridden by main.run()
    verbosity = providers.Object(0)

    logger = providers.Singleton(
        init_logger,
        "archive_browser",
        verbosity,
        config.provided.log_format,
    )

    archive_loader = providers.Factory(
        ArchiveLoader,
        logger=logger,
        settings=config,
    )

    state_store = providers.Factory(
        BrowserStateStore,
        path=config.provided.state_file,
        logger=logger,
    )

    # The filesystem is only known once an archive is loaded.
    browser = providers.Factory(
        DirectoryBrowser,
        logger=logger,
    )
