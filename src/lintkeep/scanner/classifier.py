"""Decide which candidate files need (re-)analysis."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from lintkeep.io import modified_at_ms
from lintkeep.model import Classification, FileRecord
from lintkeep.scanner.cache import CacheStore

logger = logging.getLogger(__name__)


def classify(candidate_paths: Iterable[str], store: CacheStore) -> Classification:
    """Split candidates into a dirty work set and already-clean paths.

    A candidate is dirty when it has no record, when its on-disk modification
    time moved past the recorded one, or when its record is not clean.
    Candidates that vanished from disk are reported in ``missing`` and their
    stale records are left alone. The store itself is not mutated.
    """
    work_set: list[str] = []
    satisfied: list[str] = []
    missing: list[str] = []
    records: dict[str, FileRecord] = {}

    for path in candidate_paths:
        try:
            current = modified_at_ms(path)
        except FileNotFoundError:
            missing.append(path)
            continue
        except OSError as exc:
            logger.warning("Cannot stat %s, treating it as dirty: %s", path, exc)
            previous = store.get(path)
            records[path] = FileRecord(path=path, modified_at=previous.modified_at if previous else 0, clean=False)
            work_set.append(path)
            continue

        previous = store.get(path)
        if previous is None:
            records[path] = FileRecord(path=path, modified_at=current, clean=False)
            work_set.append(path)
            continue

        if current > previous.modified_at:
            records[path] = FileRecord(path=path, modified_at=current, clean=False)
            work_set.append(path)
            continue

        records[path] = FileRecord(path=path, modified_at=current, clean=previous.clean)
        if previous.clean:
            satisfied.append(path)
        else:
            work_set.append(path)

    logger.debug(
        "Classified %d candidates: %d dirty, %d clean, %d missing",
        len(records) + len(missing),
        len(work_set),
        len(satisfied),
        len(missing),
    )
    return Classification(
        work_set=tuple(work_set),
        records=records,
        satisfied=tuple(satisfied),
        missing=tuple(missing),
    )
