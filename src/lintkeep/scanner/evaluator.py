"""Batch evaluation: enumerate, classify, analyze, persist, aggregate.

``evaluate_batch`` is the single entry point used by the one-shot CLI and by
the watch loop. Per-file analysis runs on a bounded thread pool; every worker
returns an immutable :class:`FileOutcome` and the store is only touched from
the calling thread once all workers have finished.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from lintkeep.constants.config import DEFAULT_JOBS
from lintkeep.engine import AnalysisEngine
from lintkeep.exceptions import AnalysisError, CachePersistError, FileReadError
from lintkeep.io import modified_at_ms, read_source
from lintkeep.model import BatchResult, FileOutcome, FileRecord
from lintkeep.scanner.cache import CacheStore, save_cache
from lintkeep.scanner.classifier import classify
from lintkeep.scanner.discovery import list_candidate_files

logger = logging.getLogger(__name__)


def evaluate_batch(
    root: Path,
    ignore_patterns: tuple[str, ...],
    store: CacheStore,
    engine: AnalysisEngine,
    *,
    cache_path: Path | None = None,
    jobs: int = DEFAULT_JOBS,
) -> BatchResult:
    """Run one incremental batch over ``root`` and return its result.

    Raises :class:`EnumerationError` when the candidate listing cannot be
    produced; nothing is analyzed or persisted in that case. Per-file read and
    engine failures are recorded on that file's outcome and never abort the
    batch. A failed cache write is reported in ``BatchResult.warnings``.
    """
    if jobs <= 0:
        raise ValueError("jobs must be a positive integer")

    started_at = time.perf_counter()
    candidates = list_candidate_files(root, ignore_patterns)

    classification = classify(candidates, store)
    store.update(classification.records)
    work_set = classification.work_set
    logger.info(
        "Linting %d of %d files (%d already clean)",
        len(work_set),
        len(candidates),
        len(classification.satisfied),
    )

    outcomes_by_path: dict[str, FileOutcome | None] = {}
    if work_set:
        with ThreadPoolExecutor(max_workers=min(jobs, len(work_set))) as pool:
            futures = {
                path: pool.submit(_analyze_file, path, classification.records[path], engine) for path in work_set
            }
            outcomes_by_path = {path: future.result() for path, future in futures.items()}

    outcomes: list[FileOutcome] = []
    skipped = 0
    for path in work_set:
        outcome = outcomes_by_path.get(path)
        if outcome is None:
            skipped += 1
            continue
        store.put(outcome.record)
        outcomes.append(outcome)

    warnings: list[str] = []
    if cache_path is not None:
        try:
            save_cache(cache_path, store)
        except CachePersistError as exc:
            warning = f"Cache not saved; the next run will re-lint these files ({exc})"
            warnings.append(warning)
            logger.warning(warning)

    return BatchResult(
        files=tuple(outcomes),
        work_set=work_set,
        candidates=len(candidates),
        skipped=skipped,
        duration_seconds=time.perf_counter() - started_at,
        warnings=tuple(warnings),
    )


@dataclass
class BatchEvaluator:
    """Bundle of everything ``evaluate_batch`` needs, reusable across batches."""

    root: Path
    engine: AnalysisEngine
    store: CacheStore
    ignore_patterns: tuple[str, ...] = ()
    cache_path: Path | None = None
    jobs: int = DEFAULT_JOBS

    def run(self) -> BatchResult:
        return evaluate_batch(
            self.root,
            self.ignore_patterns,
            self.store,
            self.engine,
            cache_path=self.cache_path,
            jobs=self.jobs,
        )


def _analyze_file(path: str, record: FileRecord, engine: AnalysisEngine) -> FileOutcome | None:
    """Analyze one file. Return None when it disappeared before it could be read.

    This is the engine crash boundary: unexpected exceptions raised by the
    engine are recorded as a failure for this file instead of aborting the batch.
    """
    try:
        modified_at, content = _stat_and_read(path)
    except FileNotFoundError:
        logger.debug("Skipping %s: removed before it could be read", path)
        return None
    except FileReadError as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return _failed(path, record, str(exc))

    dirty = FileRecord(path=path, modified_at=modified_at, clean=False)
    try:
        report = engine.analyze(content, path=path)
    except AnalysisError as exc:
        logger.warning("Could not analyze %s: %s", path, exc)
        return _failed(path, dirty, str(exc))
    except Exception as exc:
        logger.exception("Analysis engine crashed on %s", path)
        return _failed(path, dirty, f"{type(exc).__name__}: {exc}")

    error_findings = sum(1 for finding in report.findings if finding.is_error)
    warning_findings = len(report.findings) - error_findings
    error_count = max(report.error_count, error_findings)
    warning_count = max(report.warning_count, warning_findings)

    return FileOutcome(
        path=path,
        record=FileRecord(path=path, modified_at=modified_at, clean=error_count == 0),
        findings=report.findings,
        error_count=error_count,
        warning_count=warning_count,
    )


def _stat_and_read(path: str) -> tuple[int, str]:
    """Return the file's modification time and text.

    ``FileNotFoundError`` propagates; every other OS or decode failure becomes
    :class:`FileReadError`.
    """
    try:
        return modified_at_ms(path), read_source(path)
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(f"{type(exc).__name__}: {exc}") from exc


def _failed(path: str, record: FileRecord, reason: str) -> FileOutcome:
    return FileOutcome(
        path=path,
        record=FileRecord(path=path, modified_at=record.modified_at, clean=False),
        failure=reason,
    )
