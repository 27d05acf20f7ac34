"""Cache store exceptions."""

from __future__ import annotations

from lintkeep.exceptions.base import LintkeepError


class CacheLoadError(LintkeepError, ValueError):
    """Raised when the cache document cannot be read or parsed.

    Never escapes ``load_cache``: a broken cache degrades to an empty store.
    """


class CachePersistError(LintkeepError, OSError):
    """Raised when the cache document cannot be written."""
