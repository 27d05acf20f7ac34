"""Plain-text stdout reporter for batch results."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from lintkeep.constants.reporting import (
    ANSI_BLUE,
    ANSI_BOLD,
    ANSI_DIM,
    ANSI_GREEN,
    ANSI_RED,
    ANSI_RESET,
    ANSI_UNDERLINE,
    SEPARATOR_WIDTH,
    SEVERITY_COLORS,
    SEVERITY_SYMBOLS,
    SYMBOL_CROSS,
    SYMBOL_TICK,
)
from lintkeep.exceptions import LintkeepError
from lintkeep.model import BatchResult, FileOutcome, Finding
from lintkeep.scanner.discovery import relative_key


def _colorize(text: str, color: str) -> str:
    return f"{color}{text}{ANSI_RESET}"


class StdoutReporter:
    """Formats batch results as human-readable terminal output.

    Error findings are always listed; warnings only in verbose mode.
    """

    def __init__(
        self,
        root: Path,
        *,
        color: bool = True,
        verbose: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        self._root = root.resolve()
        self._color = color
        self._verbose = verbose
        self._stream = stream

    def report_start(self, changed: Sequence[str]) -> None:
        if not changed:
            return
        self._write(self.render_start(changed))

    def report_batch(self, result: BatchResult) -> None:
        self._write(self.render(result))

    def report_failure(self, error: LintkeepError) -> None:
        self._write(self._paint(f"{SYMBOL_CROSS} Lint run failed: {error}", ANSI_RED))

    def render_start(self, changed: Sequence[str]) -> str:
        shown = ", ".join(relative_key(path, self._root) for path in changed[:3])
        more = f" (+{len(changed) - 3} more)" if len(changed) > 3 else ""
        return "\n".join(
            [
                "",
                "=" * SEPARATOR_WIDTH,
                self._paint(f"File change: {shown}{more}. Linting files ...", ANSI_BLUE),
            ]
        )

    def render(self, result: BatchResult) -> str:
        """Render the full batch report as a single string."""
        lines: list[str] = []
        for outcome in result.files:
            lines.extend(self._render_outcome(outcome))

        lines.append("")
        for warning in result.warnings:
            lines.append(self._paint(f"warning: {warning}", ANSI_DIM))

        if result.passed:
            lines.append(self._paint(f"{SYMBOL_TICK} No lint errors", ANSI_GREEN))
        else:
            lines.append(self._paint(f"{SYMBOL_CROSS} Lint failed", ANSI_RED))
        lines.append(self._paint(self._summary(result), ANSI_DIM))
        lines.append("")
        return "\n".join(lines)

    def _render_outcome(self, outcome: FileOutcome) -> list[str]:
        if outcome.failed:
            return [
                "",
                self._render_path(outcome.path),
                self._paint(f"{SYMBOL_CROSS} could not analyze: {outcome.failure}", ANSI_RED),
            ]

        shown = [finding for finding in outcome.findings if finding.is_error or self._verbose]
        if not shown:
            return []
        return ["", self._render_path(outcome.path), *(self._render_finding(finding) for finding in shown)]

    def _render_path(self, path: str) -> str:
        text = relative_key(path, self._root)
        return _colorize(text, f"{ANSI_BOLD}{ANSI_UNDERLINE}") if self._color else text

    def _render_finding(self, finding: Finding) -> str:
        symbol = SEVERITY_SYMBOLS.get(finding.severity, "?")
        prefix = self._paint(f"{symbol} : ", SEVERITY_COLORS.get(finding.severity, ""))
        rule = f" ({finding.rule_id})" if finding.rule_id else ""
        return f"{prefix} [line: {finding.line}, column: {finding.column}] {finding.message}{rule}"

    @staticmethod
    def _summary(result: BatchResult) -> str:
        clean = max(0, result.candidates - len(result.work_set))
        parts = [
            f"{len(result.files)} linted",
            f"{clean} unchanged",
            f"{result.error_count} errors",
            f"{result.warning_count} warnings",
        ]
        if result.failures:
            parts.append(f"{len(result.failures)} not analyzed")
        if result.skipped:
            parts.append(f"{result.skipped} removed")
        return f"{' · '.join(parts)} in {result.duration_seconds:.3f}s"

    def _paint(self, text: str, color: str) -> str:
        return _colorize(text, color) if self._color and color else text

    def _write(self, text: str) -> None:
        stream = self._stream or sys.stdout
        print(text, file=stream, flush=True)
