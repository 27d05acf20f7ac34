"""Root exception for Lintkeep."""

from __future__ import annotations


class LintkeepError(Exception):
    """Base class for all Lintkeep errors."""
