"""Per-file analysis exceptions."""

from __future__ import annotations

from lintkeep.exceptions.base import LintkeepError


class FileReadError(LintkeepError, OSError):
    """Raised when a candidate file exists but cannot be read."""


class AnalysisError(LintkeepError, RuntimeError):
    """Raised when the analysis engine fails to produce a report."""
