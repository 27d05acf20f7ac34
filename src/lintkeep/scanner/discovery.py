"""Candidate file enumeration with glob-style ignore patterns."""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path, PurePosixPath

from lintkeep.exceptions import EnumerationError

logger = logging.getLogger(__name__)


def list_candidate_files(root: Path, ignore_patterns: tuple[str, ...] = ()) -> list[str]:
    """Return absolute paths of all non-ignored files under ``root``.

    Paths are sorted by their root-relative POSIX form so batch output order is
    stable across runs. Ignored directories are pruned without descending.
    """
    resolved_root = root.resolve()
    if not resolved_root.is_dir():
        raise EnumerationError(f"Lint root does not exist or is not a directory: {resolved_root}")

    discovered: list[tuple[str, str]] = []

    def _on_error(exc: OSError) -> None:
        if Path(exc.filename or "") == resolved_root:
            raise EnumerationError(f"Cannot list lint root {resolved_root}: {exc}") from exc
        logger.warning("Skipping unreadable directory %s: %s", exc.filename, exc)

    for dirpath, dirnames, filenames in os.walk(resolved_root, onerror=_on_error):
        current = Path(dirpath)
        dirnames[:] = sorted(
            name for name in dirnames if not is_ignored(_relative_key(current / name, resolved_root), ignore_patterns)
        )
        for name in filenames:
            path = current / name
            relative = _relative_key(path, resolved_root)
            if is_ignored(relative, ignore_patterns):
                continue
            discovered.append((relative, str(path)))

    discovered.sort(key=lambda item: item[0])
    logger.debug("Enumerated %d candidate files under %s", len(discovered), resolved_root)
    return [path for _, path in discovered]


def is_ignored(relative_path: str, ignore_patterns: tuple[str, ...]) -> bool:
    """Match a root-relative POSIX path against ignore globs.

    A pattern matches when it matches any single path segment (``*.json``,
    ``node_modules``) or the whole relative path (``build/*``, ``src/*.min.js``).
    """
    if not ignore_patterns:
        return False
    parts = PurePosixPath(relative_path).parts
    for pattern in ignore_patterns:
        if fnmatch.fnmatchcase(relative_path, pattern):
            return True
        if any(fnmatch.fnmatchcase(part, pattern) for part in parts):
            return True
    return False


def relative_key(path: str | Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` in POSIX form, or the absolute path when outside it."""
    return _relative_key(Path(path), root.resolve())


def _relative_key(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()
