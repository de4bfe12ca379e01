"""Normalization of archive member names and query paths."""
from __future__ import annotations

import os
from pathlib import PurePath

SEPARATOR = "/"
ROOT = ""


def normalize_path(path: str | os.PathLike[str]) -> str | None:
    """Normalize a slash-separated path relative to the archive root.

    Parameters
    ----------
    path : str or os.PathLike
        A member name read from an archive or a path supplied by a caller.

    Returns
    -------
    str or None
        The normalized path (``""`` for the root), or ``None`` when ``..``
        segments climb above the root.

    """
    if isinstance(path, PurePath):
        text = path.as_posix()
    else:
        text = os.fspath(path)

    parts: list[str] = []
    for segment in text.replace("\\", SEPARATOR).split(SEPARATOR):
        if segment in ("", "."):
            continue
        if segment == "..":
            if not parts:
                return None
            parts.pop()
            continue
        parts.append(segment)

    return SEPARATOR.join(parts)


def join_path(base: str, name: str) -> str:
    """Join one child segment onto a normalized base path."""
    return f"{base}{SEPARATOR}{name}" if base else name


def directory_prefix(base: str) -> str:
    """Return the prefix every descendant of ``base`` starts with."""
    return f"{base}{SEPARATOR}" if base else ROOT


def first_segment(remainder: str) -> str:
    """Return the first segment of a relative path."""
    return remainder.split(SEPARATOR, 1)[0]
