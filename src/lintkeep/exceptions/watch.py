"""Batch-level and watch-loop exceptions."""

from __future__ import annotations

from lintkeep.exceptions.base import LintkeepError


class EnumerationError(LintkeepError, OSError):
    """Raised when the candidate file listing cannot be produced."""


class WatchSubscriptionError(LintkeepError, OSError):
    """Raised when the filesystem watch cannot be established."""
