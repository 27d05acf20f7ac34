"""Analysis engine adapters."""

from __future__ import annotations

from lintkeep.engine.base import AnalysisEngine
from lintkeep.engine.command import CommandEngine, parse_eslint_report

__all__ = ["AnalysisEngine", "CommandEngine", "parse_eslint_report"]
