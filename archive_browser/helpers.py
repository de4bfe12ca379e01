"""Helper functions."""
from argparse import ArgumentParser, Namespace
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from json import JSONEncoder, dumps
from logging import DEBUG, INFO
from pathlib import Path, PurePath
from typing import Any, Sequence

import coloredlogs
from verboselogs import SPAM, VERBOSE, VerboseLogger

LOG_LEVELS: list[int] = [INFO, VERBOSE, DEBUG, SPAM]


class EnhancedJSONEncoder(JSONEncoder):
    """Enhanced JSON encoder for specific classes."""

    def default(self, o: Any) -> Any:  # type: ignore[override]
        """Handle custom types JSON serialization."""
        if is_dataclass(o) and not isinstance(o, type):
            return asdict(o)
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        if isinstance(o, PurePath):
            return o.as_posix()
        if isinstance(o, (set, frozenset)):
            return sorted(o)
        return super().default(o)


def dump_to_file(
    logger: VerboseLogger, filename: str | Path, content: str | Any
) -> bool:
    """Save data to local file.

    Parameters
    ----------
    logger : verboselogs.VerboseLogger
        The program's logger.
    filename : str or pathlib.Path
        The file to write to.
    content : str or Any
        The data to write. Anything else than a string is written as JSON.

    Returns
    -------
    bool
        Whether the file was written.

    """
    filepath = Path(filename)

    try:
        if not filepath.parent.exists():
            filepath.parent.mkdir(parents=True)

        if not isinstance(content, str):
            filepath.write_text(
                dumps(
                    content,
                    ensure_ascii=False,
                    cls=EnhancedJSONEncoder,
                    indent=4,
                ),
                encoding="utf-8",
            )
        else:
            filepath.write_text(content, encoding="utf-8")

    except (FileNotFoundError, OSError, PermissionError, TypeError, ValueError) as err:
        logger.error(f"Failed to write file to '{str(filepath)}': {err}")
        return False

    logger.verbose(f"Successfully wrote '{str(filepath)}'.")
    return True


def parse_options(description: str, argv: Sequence[str] | None = None) -> Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    description : str
        The program's description.
    argv : list of str, optional
        Arguments to parse instead of ``sys.argv[1:]``.

    Returns
    -------
    argparse.Namespace
        Parsed command-line arguments as an object.

    """
    parser = ArgumentParser(description=description)

    parser.add_argument(
        "filename",
        type=str,
        help="the archive to browse (handled formats: .zip, .7z, .rar)",
    )
    parser.add_argument(
        "-p",
        "--password",
        metavar="ARCHIVE_PASSWORD",
        type=str,
        default=None,
        help="the archive's password if required",
    )
    parser.add_argument(
        "--path",
        metavar="PATH",
        type=str,
        default=None,
        help="directory inside the archive to open (default: last visited "
        "path, or the archive root)",
    )
    parser.add_argument(
        "--no-restore",
        action="store_true",
        help="do not reopen the last visited path",
    )

    view = parser.add_mutually_exclusive_group()
    view.add_argument(
        "--tree",
        action="store_true",
        help="print every entry below the directory as a tree",
    )
    view.add_argument(
        "--stat",
        metavar="PATH",
        type=str,
        default=None,
        help="print the metadata of a path inside the archive",
    )

    parser.add_argument(
        "--dump-json",
        metavar="FILENAME.json",
        type=str,
        default=None,
        help="also write the listing to a JSON file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="increase logs output verbosity (default: info, -v: verbose, "
        "-vv: debug, -vvv: spam)",
    )

    return parser.parse_args(argv)


def init_logger(
    name: str,
    verbosity_level: int | str = 0,
    formatting: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
) -> VerboseLogger:
    """Initialize the program's logger.

    Parameters
    ----------
    name : str
        The logger's name.
    verbosity_level : int or str
        Either a ``-v`` count (0 to 3) or a level name such as ``"DEBUG"``.
    formatting : str, optional
        The log format.

    Returns
    -------
    verboselogs.VerboseLogger
        The logger.

    """
    if isinstance(verbosity_level, int):
        level = LOG_LEVELS[max(0, min(verbosity_level, len(LOG_LEVELS) - 1))]
    else:
        level = coloredlogs.level_to_number(verbosity_level.upper())

    logger = VerboseLogger(name)

    coloredlogs.install(
        logger=logger,
        level=level,
        fmt=formatting,
        isatty=True,
    )
    logger.setLevel(level)

    return logger
