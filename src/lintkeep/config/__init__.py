"""Configuration loading and normalization for Lintkeep runs."""

from __future__ import annotations

from lintkeep.config.loader import load_config
from lintkeep.config.model import EngineConfig, LintkeepConfig, WatchConfig

__all__ = ["EngineConfig", "LintkeepConfig", "WatchConfig", "load_config"]
