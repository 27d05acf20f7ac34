"""Interface the batch evaluator expects from an analysis engine."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lintkeep.model import AnalysisReport


@runtime_checkable
class AnalysisEngine(Protocol):
    """Turns one file's content into a report of findings.

    ``path`` is a hint for engines that pick rules by filename; the content
    passed in is what gets analyzed. Implementations raise
    :class:`lintkeep.exceptions.AnalysisError` when no report can be produced,
    and must be safe to call from several worker threads at once.
    """

    def analyze(self, content: str, *, path: str) -> AnalysisReport: ...
