"""Config data model for Lintkeep runs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from lintkeep.constants.cache import DEFAULT_CACHE_RELATIVE_PATH
from lintkeep.constants.config import (
    DEFAULT_DEBOUNCE_SECONDS,
    DEFAULT_ENGINE_COMMAND,
    DEFAULT_IGNORE_PATTERNS,
    DEFAULT_JOBS,
)


@dataclass(frozen=True)
class EngineConfig:
    """Subprocess analysis engine settings."""

    command: tuple[str, ...] = DEFAULT_ENGINE_COMMAND
    timeout_seconds: float | None = None


@dataclass(frozen=True)
class WatchConfig:
    """Watch loop settings."""

    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS


@dataclass(frozen=True)
class LintkeepConfig:
    """Resolved runner config."""

    engine: EngineConfig = EngineConfig()
    ignore: tuple[str, ...] = DEFAULT_IGNORE_PATTERNS
    extend_ignore: tuple[str, ...] = ()
    cache_path: str = DEFAULT_CACHE_RELATIVE_PATH
    jobs: int = DEFAULT_JOBS
    watch: WatchConfig = WatchConfig()
    notify_command: tuple[str, ...] | None = None

    @property
    def ignore_patterns(self) -> tuple[str, ...]:
        """Ignore globs after appending ``extend_ignore``, deduplicated in order."""
        return tuple(dict.fromkeys((*self.ignore, *self.extend_ignore)))

    def resolve_cache_path(self, root: Path) -> Path:
        """Return the absolute cache file location for ``root``."""
        path = Path(self.cache_path).expanduser()
        if not path.is_absolute():
            path = root / path
        return path.resolve()
