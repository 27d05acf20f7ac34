"""Configuration-related exceptions."""

from __future__ import annotations

from lintkeep.exceptions.base import LintkeepError


class ConfigError(LintkeepError, ValueError):
    """Raised when runner configuration is invalid."""
