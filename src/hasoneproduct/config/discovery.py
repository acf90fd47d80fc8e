"""Locate ``hasoneproduct.toml``.

The file is looked up from the working directory towards the filesystem
root, nearest first.  ``HASONEPRODUCT_CONFIG`` pins an exact file and
disables the walk.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "hasoneproduct.toml"
CONFIG_ENV_VAR = "HASONEPRODUCT_CONFIG"


def _ancestors(start: Path) -> Iterator[Path]:
    here = start.resolve()
    yield here
    yield from here.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), if any.

    A ``HASONEPRODUCT_CONFIG`` pointing at a missing file yields None
    rather than falling back to the walk.
    """
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned)
        return path if path.is_file() else None

    for directory in _ancestors(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
