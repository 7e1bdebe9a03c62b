"""Filesystem access to the component source directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List


def read_source(path: Path) -> str:
    """Read ``path`` as UTF-8 without newline translation."""
    with path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()


def list_source_files(directory: Path, suffix: str, *, sort: bool = False) -> List[Path]:
    """Return regular files in ``directory`` ending with ``suffix``.

    The listing is not recursive and keeps the order the filesystem reports
    unless ``sort`` is set.
    """
    with os.scandir(directory) as entries:
        names = [
            entry.name
            for entry in entries
            if entry.name.endswith(suffix) and entry.is_file()
        ]
    if sort:
        names.sort()
    return [directory / name for name in names]


__all__ = ["list_source_files", "read_source"]
