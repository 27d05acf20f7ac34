"""Constants used by the incremental cache store."""

from __future__ import annotations

CACHE_VERSION: int = 1
DEFAULT_CACHE_RELATIVE_PATH: str = ".cache/lintkeep.json"
CACHE_TEMP_PREFIX: str = ".lintkeep-"
CACHE_TEMP_SUFFIX: str = ".tmp"

NANOSECONDS_PER_MILLISECOND: int = 1_000_000
