from __future__ import annotations
from collections.abc import Iterator
import os
from pathlib import Path


def cat(path: Path) -> str | None:
    """
    Return the contents of the given file with leading & trailing whitespace
    stripped.  If the file does not exist, return `None`.
    """
    try:
        return path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return None


def ancestors(path: Path) -> Iterator[Path]:
    """
    Yield ``path`` followed by each of its parent directories in turn, ending
    with the filesystem root
    """
    path = Path(os.path.abspath(path))
    while True:
        yield path
        if path.parent == path:
            return
        path = path.parent
