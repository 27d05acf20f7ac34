"""Cache loading and persistence for per-file analysis state."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from lintkeep.constants.cache import CACHE_TEMP_PREFIX, CACHE_TEMP_SUFFIX, CACHE_VERSION
from lintkeep.exceptions import CacheLoadError, CachePersistError
from lintkeep.io import load_json_file, write_json_atomic
from lintkeep.model import FileRecord
from lintkeep.types import CachePayload

logger = logging.getLogger(__name__)


class CacheStore:
    """In-memory mapping of absolute path to :class:`FileRecord`.

    A path missing from the store has never been analyzed and is treated as
    dirty. The store is owned by one batch at a time.
    """

    def __init__(self, records: dict[str, FileRecord] | None = None) -> None:
        self._records: dict[str, FileRecord] = dict(records or {})

    def get(self, path: str) -> FileRecord | None:
        return self._records.get(path)

    def put(self, record: FileRecord) -> None:
        """Insert or overwrite the record for ``record.path``."""
        self._records[record.path] = record

    def update(self, records: dict[str, FileRecord]) -> None:
        for record in records.values():
            self.put(record)

    def remove(self, path: str) -> FileRecord | None:
        return self._records.pop(path, None)

    def records(self) -> dict[str, FileRecord]:
        """Return a snapshot copy of all records."""
        return dict(self._records)

    def to_payload(self) -> CachePayload:
        return {
            "version": CACHE_VERSION,
            "files": {path: record.to_dict() for path, record in sorted(self._records.items())},
        }

    def __contains__(self, path: object) -> bool:
        return path in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CacheStore):
            return NotImplemented
        return self._records == other._records

    def __repr__(self) -> str:
        return f"CacheStore({len(self._records)} records)"


def load_cache(cache_path: Path) -> CacheStore:
    """Load the cache file if valid, otherwise return an empty store.

    Never raises: a missing, unreadable or malformed cache only forces a full
    re-analysis.
    """
    try:
        payload = _read_payload(cache_path)
    except CacheLoadError as exc:
        logger.info("Ignoring cache at %s: %s", cache_path, exc)
        return CacheStore()

    return CacheStore(_normalize_files(payload.get("files")))


def save_cache(cache_path: Path, store: CacheStore) -> None:
    """Persist the store to disk atomically."""
    try:
        write_json_atomic(
            path=cache_path,
            payload=store.to_payload(),
            temp_prefix=CACHE_TEMP_PREFIX,
            temp_suffix=CACHE_TEMP_SUFFIX,
        )
    except OSError as exc:
        raise CachePersistError(f"Failed to write cache {cache_path}: {exc}") from exc
    logger.debug("Saved %d cache records to %s", len(store), cache_path)


def clear_cache(cache_path: Path) -> bool:
    """Delete the cache file. Return True when a file was removed."""
    try:
        cache_path.unlink()
    except FileNotFoundError:
        logger.info("Cache file does not exist, nothing to clear: %s", cache_path)
        return False
    logger.info("Deleted cache file %s", cache_path)
    return True


def prune_missing(store: CacheStore) -> list[str]:
    """Drop records whose files no longer exist and return their paths.

    The classifier keeps stale records on purpose; this is the explicit
    cleanup step behind ``lintkeep prune-cache``.
    """
    removed = [path for path in list(store) if not os.path.exists(path)]
    for path in removed:
        store.remove(path)
    return sorted(removed)


def _read_payload(cache_path: Path) -> dict[object, object]:
    try:
        payload = load_json_file(cache_path)
    except FileNotFoundError as exc:
        raise CacheLoadError("cache file not found") from exc
    except (OSError, ValueError) as exc:
        raise CacheLoadError(str(exc)) from exc

    if not isinstance(payload, dict):
        raise CacheLoadError("top-level value is not an object")
    version = payload.get("version")
    if version != CACHE_VERSION:
        raise CacheLoadError(f"unsupported cache version {version!r}")
    return payload


def _normalize_files(raw_files: object) -> dict[str, FileRecord]:
    """Keep well-formed entries; anything else is treated as absent."""
    if not isinstance(raw_files, dict):
        return {}

    records: dict[str, FileRecord] = {}
    for key, value in raw_files.items():
        record = _parse_entry(key, value)
        if record is None:
            logger.debug("Dropping malformed cache entry for %r", key)
            continue
        records[record.path] = record
    return records


def _parse_entry(key: object, value: object) -> FileRecord | None:
    if not isinstance(key, str) or not isinstance(value, dict):
        return None

    path = value.get("path")
    modified_at = value.get("modified_at")
    clean = value.get("clean")

    if not isinstance(path, str) or path != key:
        return None
    if isinstance(modified_at, bool) or not isinstance(modified_at, int):
        return None
    if not isinstance(clean, bool):
        return None

    return FileRecord(path=path, modified_at=modified_at, clean=clean)
