"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "lintkeep.yaml"

DEFAULT_ENGINE_COMMAND: tuple[str, ...] = ("eslint", "--stdin", "--format", "json")
DEFAULT_JOBS: int = 4
DEFAULT_DEBOUNCE_SECONDS: float = 0.2

# Paths matched per segment and against the root-relative path.
DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    "*.json",
    "*.html",
    "*.css",
    ".DS_Store",
    ".git",
    ".hg",
    ".svn",
    ".cache",
    "node_modules",
)

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {"engine", "ignore", "extend_ignore", "cache_path", "jobs", "watch", "notify_command"}
)
ALLOWED_ENGINE_KEYS: frozenset[str] = frozenset({"command", "timeout_seconds"})
ALLOWED_WATCH_KEYS: frozenset[str] = frozenset({"debounce_seconds"})
