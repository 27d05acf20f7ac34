"""Config loading and normalization for Lintkeep runs."""

from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import Any

import yaml

from lintkeep.config.model import EngineConfig, LintkeepConfig, WatchConfig
from lintkeep.constants.cache import DEFAULT_CACHE_RELATIVE_PATH
from lintkeep.constants.config import (
    ALLOWED_CONFIG_KEYS,
    ALLOWED_ENGINE_KEYS,
    ALLOWED_WATCH_KEYS,
    CONFIG_FILENAME,
    DEFAULT_DEBOUNCE_SECONDS,
    DEFAULT_ENGINE_COMMAND,
    DEFAULT_IGNORE_PATTERNS,
    DEFAULT_JOBS,
)
from lintkeep.exceptions import ConfigError

logger = logging.getLogger(__name__)


def load_config(root: Path, config_path: Path | None = None) -> LintkeepConfig:
    """Load and validate runner config from ``lintkeep.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return LintkeepConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    _reject_unknown_keys(raw, ALLOWED_CONFIG_KEYS, "")
    logger.debug("Loaded config from %s", path)

    engine_raw = _ensure_mapping(raw.get("engine"), "engine")
    _reject_unknown_keys(engine_raw, ALLOWED_ENGINE_KEYS, "engine.")
    watch_raw = _ensure_mapping(raw.get("watch"), "watch")
    _reject_unknown_keys(watch_raw, ALLOWED_WATCH_KEYS, "watch.")

    command = tuple(_ensure_string_list(engine_raw.get("command", list(DEFAULT_ENGINE_COMMAND)), "engine.command"))
    if not command or not command[0].strip():
        raise ConfigError("engine.command must name an executable")

    timeout_seconds = engine_raw.get("timeout_seconds")
    if timeout_seconds is not None and (not _is_number(timeout_seconds) or timeout_seconds <= 0):
        raise ConfigError("engine.timeout_seconds must be a positive number")

    jobs = raw.get("jobs", DEFAULT_JOBS)
    if isinstance(jobs, bool) or not isinstance(jobs, int) or jobs <= 0:
        raise ConfigError("jobs must be a positive integer")

    cache_path = raw.get("cache_path", DEFAULT_CACHE_RELATIVE_PATH)
    if not isinstance(cache_path, str) or not cache_path.strip():
        raise ConfigError("cache_path must be a non-empty string")

    debounce_seconds = watch_raw.get("debounce_seconds", DEFAULT_DEBOUNCE_SECONDS)
    if not _is_number(debounce_seconds) or debounce_seconds < 0:
        raise ConfigError("watch.debounce_seconds must be a non-negative number")

    notify_raw = raw.get("notify_command")
    notify_command = tuple(_ensure_string_list(notify_raw, "notify_command")) if notify_raw is not None else None
    if notify_command is not None and not notify_command:
        raise ConfigError("notify_command must not be empty when set")

    return LintkeepConfig(
        engine=EngineConfig(
            command=command,
            timeout_seconds=float(timeout_seconds) if timeout_seconds is not None else None,
        ),
        ignore=_normalize_patterns(_ensure_string_list(raw.get("ignore", list(DEFAULT_IGNORE_PATTERNS)), "ignore")),
        extend_ignore=_normalize_patterns(_ensure_string_list(raw.get("extend_ignore", []), "extend_ignore")),
        cache_path=cache_path.strip(),
        jobs=jobs,
        watch=WatchConfig(debounce_seconds=float(debounce_seconds)),
        notify_command=notify_command,
    )


def _ensure_mapping(value: Any, key_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key_name} must be a mapping")
    return value


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)


def _normalize_patterns(patterns: list[str]) -> tuple[str, ...]:
    """Strip blanks and duplicates while keeping declaration order."""
    return tuple(dict.fromkeys(pattern.strip() for pattern in patterns if pattern.strip()))


def _is_number(value: Any) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, float))


def _reject_unknown_keys(raw: dict[str, Any], allowed: frozenset[str], prefix: str) -> None:
    unknown = sorted(str(key) for key in raw if key not in allowed)
    if not unknown:
        return
    key = unknown[0]
    suggestion = difflib.get_close_matches(key, sorted(allowed), n=1)
    hint = f" (did you mean '{prefix}{suggestion[0]}'?)" if suggestion else ""
    raise ConfigError(f"Unknown config key '{prefix}{key}'{hint}")
