"""Reporting sinks for batch results."""

from __future__ import annotations

from lintkeep.reporting.base import CompositeReporter, Reporter
from lintkeep.reporting.notify import CommandNotifier
from lintkeep.reporting.stdout import StdoutReporter

__all__ = ["CommandNotifier", "CompositeReporter", "Reporter", "StdoutReporter"]
