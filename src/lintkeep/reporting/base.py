"""Reporter interface consumed by the CLI and the watch loop."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from lintkeep.exceptions import LintkeepError
from lintkeep.model import BatchResult


class Reporter(Protocol):
    def report_start(self, changed: Sequence[str]) -> None:
        """Called before a batch; ``changed`` is empty for the initial run."""

    def report_batch(self, result: BatchResult) -> None:
        """Called with every completed batch."""

    def report_failure(self, error: LintkeepError) -> None:
        """Called when a batch could not run at all."""


class CompositeReporter:
    """Fan out every call to several reporters in order."""

    def __init__(self, *reporters: Reporter) -> None:
        self._reporters = reporters

    def report_start(self, changed: Sequence[str]) -> None:
        for reporter in self._reporters:
            reporter.report_start(changed)

    def report_batch(self, result: BatchResult) -> None:
        for reporter in self._reporters:
            reporter.report_batch(result)

    def report_failure(self, error: LintkeepError) -> None:
        for reporter in self._reporters:
            reporter.report_failure(error)
