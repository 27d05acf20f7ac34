"""File-level helpers for modification times and source reads."""

from __future__ import annotations

import os
from pathlib import Path

from lintkeep.constants.cache import NANOSECONDS_PER_MILLISECOND


def modified_at_ms(path: str | Path) -> int:
    """Return the file's modification time in epoch milliseconds.

    Raises ``FileNotFoundError`` when the path no longer exists.
    """
    return os.stat(path).st_mtime_ns // NANOSECONDS_PER_MILLISECOND


def read_source(path: str | Path) -> str:
    """Read a source file as UTF-8 text."""
    return Path(path).read_text(encoding="utf-8")
