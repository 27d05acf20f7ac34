"""Shared exception hierarchy for Lintkeep."""

from __future__ import annotations

from .analysis import AnalysisError, FileReadError
from .base import LintkeepError
from .cache import CacheLoadError, CachePersistError
from .config import ConfigError
from .watch import EnumerationError, WatchSubscriptionError

__all__ = [
    "AnalysisError",
    "CacheLoadError",
    "CachePersistError",
    "ConfigError",
    "EnumerationError",
    "FileReadError",
    "LintkeepError",
    "WatchSubscriptionError",
]
