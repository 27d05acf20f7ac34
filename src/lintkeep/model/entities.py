"""Dataclasses shared by the cache, classifier, evaluator and reporters."""

from __future__ import annotations

from dataclasses import dataclass, field

from lintkeep.types import CacheFileEntry, Severity


@dataclass(frozen=True)
class FileRecord:
    """Last-known analysis state of one tracked file.

    ``clean`` is only true when the file was analyzed with zero error-severity
    findings at ``modified_at`` (epoch milliseconds) and has not changed since.
    """

    path: str
    modified_at: int
    clean: bool = False

    def to_dict(self) -> CacheFileEntry:
        """Return the persisted form of this record."""
        return {"path": self.path, "modified_at": self.modified_at, "clean": self.clean}


@dataclass(frozen=True)
class Finding:
    """One diagnostic reported by the analysis engine."""

    severity: Severity
    line: int
    column: int
    message: str
    rule_id: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == "error"


@dataclass(frozen=True)
class AnalysisReport:
    """Engine output for a single file's content."""

    error_count: int = 0
    warning_count: int = 0
    findings: tuple[Finding, ...] = ()


@dataclass(frozen=True)
class Classification:
    """Work set computed by the change classifier.

    ``records`` holds the refreshed record for every candidate that still
    exists, including newly seen paths, and is merged into the store before
    analysis starts.
    """

    work_set: tuple[str, ...]
    records: dict[str, FileRecord]
    satisfied: tuple[str, ...] = ()
    missing: tuple[str, ...] = ()


@dataclass(frozen=True)
class FileOutcome:
    """Result of analyzing one file in a batch."""

    path: str
    record: FileRecord
    findings: tuple[Finding, ...] = ()
    error_count: int = 0
    warning_count: int = 0
    failure: str | None = None

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    @property
    def failed(self) -> bool:
        """True when the file could not be analyzed at all."""
        return self.failure is not None


@dataclass(frozen=True)
class BatchResult:
    """Outcome of one classify, analyze, persist pass."""

    files: tuple[FileOutcome, ...] = ()
    work_set: tuple[str, ...] = ()
    candidates: int = 0
    skipped: int = 0
    duration_seconds: float = 0.0
    warnings: tuple[str, ...] = field(default=())

    @property
    def has_blocking_findings(self) -> bool:
        """True if any file analyzed in this batch reported an error-severity finding."""
        return any(outcome.has_errors for outcome in self.files)

    @property
    def failures(self) -> tuple[FileOutcome, ...]:
        return tuple(outcome for outcome in self.files if outcome.failed)

    @property
    def findings_by_file(self) -> list[tuple[str, tuple[Finding, ...]]]:
        """Findings grouped by file in enumeration order."""
        return [(outcome.path, outcome.findings) for outcome in self.files]

    @property
    def error_count(self) -> int:
        return sum(outcome.error_count for outcome in self.files)

    @property
    def warning_count(self) -> int:
        return sum(outcome.warning_count for outcome in self.files)

    @property
    def passed(self) -> bool:
        return not self.has_blocking_findings and not self.failures
