"""Recursive directory walking filtered by file extension."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator


def _extension(name: str) -> str | None:
    before, dot, after = name.rpartition(".")
    if not dot or not before or name == "..":
        return None
    return after


def visit_files(directory: str | os.PathLike[str], extensions: Iterable[str]) -> Iterator[os.DirEntry[str]]:
    """Yield every file below ``directory`` whose extension is one of ``extensions``."""
    wanted = set(extensions)
    with os.scandir(directory) as it:
        entries = list(it)
    for entry in entries:
        if entry.is_dir():
            yield from visit_files(entry.path, wanted)
        elif _extension(entry.name) in wanted:
            yield entry


def visit_files_contents(
    directory: str | os.PathLike[str], extensions: Iterable[str]
) -> Iterator[tuple[os.DirEntry[str], str]]:
    """Yield each matching file together with its text contents."""
    for entry in visit_files(directory, extensions):
        with open(entry.path, encoding="utf-8") as handle:
            yield entry, handle.read()