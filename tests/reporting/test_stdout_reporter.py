"""Tests for the stdout reporter and reporter fan-out."""

from __future__ import annotations

import io
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from lintkeep.constants.reporting import ANSI_RED, ANSI_RESET, SYMBOL_CROSS, SYMBOL_TICK
from lintkeep.exceptions import EnumerationError, LintkeepError
from lintkeep.model import BatchResult, FileOutcome, FileRecord, Finding
from lintkeep.reporting import CommandNotifier, CompositeReporter, StdoutReporter

ROOT = Path("/repo")


def _outcome(
    name: str,
    *findings: Finding,
    failure: str | None = None,
) -> FileOutcome:
    path = str(ROOT / name)
    errors = sum(1 for finding in findings if finding.is_error)
    return FileOutcome(
        path=path,
        record=FileRecord(path=path, modified_at=1, clean=errors == 0 and failure is None),
        findings=findings,
        error_count=errors,
        warning_count=len(findings) - errors,
        failure=failure,
    )


def _result(*outcomes: FileOutcome, candidates: int = 5, **kwargs: Any) -> BatchResult:
    return BatchResult(
        files=outcomes,
        work_set=tuple(outcome.path for outcome in outcomes),
        candidates=candidates,
        duration_seconds=0.25,
        **kwargs,
    )


ERROR = Finding("error", 3, 7, "Missing semicolon.", "semi")
WARNING = Finding("warning", 1, 5, "'x' is assigned a value but never used.", "no-unused-vars")


def test_render_passed_batch() -> None:
    reporter = StdoutReporter(ROOT, color=False)

    output = reporter.render(_result(_outcome("a.js")))

    assert f"{SYMBOL_TICK} No lint errors" in output
    assert "1 linted · 4 unchanged · 0 errors · 0 warnings in 0.250s" in output


def test_render_lists_errors_with_location() -> None:
    reporter = StdoutReporter(ROOT, color=False)

    output = reporter.render(_result(_outcome("src/a.js", ERROR, WARNING)))

    assert "src/a.js" in output
    assert f"{SYMBOL_CROSS} :  [line: 3, column: 7] Missing semicolon. (semi)" in output
    assert "never used" not in output
    assert f"{SYMBOL_CROSS} Lint failed" in output


def test_verbose_render_includes_warnings() -> None:
    reporter = StdoutReporter(ROOT, color=False, verbose=True)

    output = reporter.render(_result(_outcome("src/a.js", WARNING)))

    assert "[line: 1, column: 5] 'x' is assigned a value but never used. (no-unused-vars)" in output
    assert f"{SYMBOL_TICK} No lint errors" in output


def test_render_failures_and_warnings() -> None:
    reporter = StdoutReporter(ROOT, color=False)
    result = _result(
        _outcome("broken.js", failure="AnalysisError: engine crashed"),
        warnings=("Cache not saved; the next run will re-lint these files (disk full)",),
        skipped=1,
    )

    output = reporter.render(result)

    assert "could not analyze: AnalysisError: engine crashed" in output
    assert "warning: Cache not saved" in output
    assert "1 not analyzed" in output
    assert "1 removed" in output
    assert f"{SYMBOL_CROSS} Lint failed" in output


def test_color_output_wraps_status() -> None:
    reporter = StdoutReporter(ROOT, color=True)

    output = reporter.render(_result(_outcome("a.js", ERROR)))

    assert f"{ANSI_RED}{SYMBOL_CROSS} Lint failed{ANSI_RESET}" in output


def test_plain_output_has_no_escape_codes() -> None:
    reporter = StdoutReporter(ROOT, color=False)

    assert "\033[" not in reporter.render(_result(_outcome("a.js", ERROR)))


def test_report_start_is_silent_for_initial_run() -> None:
    stream = io.StringIO()
    reporter = StdoutReporter(ROOT, color=False, stream=stream)

    reporter.report_start([])

    assert stream.getvalue() == ""


def test_report_start_names_changed_files() -> None:
    stream = io.StringIO()
    reporter = StdoutReporter(ROOT, color=False, stream=stream)

    reporter.report_start([str(ROOT / name) for name in ("a.js", "b.js", "c.js", "d.js", "e.js")])

    assert "File change: a.js, b.js, c.js (+2 more). Linting files ..." in stream.getvalue()


def test_report_failure_writes_message() -> None:
    stream = io.StringIO()
    reporter = StdoutReporter(ROOT, color=False, stream=stream)

    reporter.report_failure(EnumerationError("root is gone"))

    assert f"{SYMBOL_CROSS} Lint run failed: root is gone" in stream.getvalue()


class _Recorder:
    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def report_start(self, changed: Sequence[str]) -> None:
        self.events.append(("start", list(changed)))

    def report_batch(self, result: BatchResult) -> None:
        self.events.append(("batch", result))

    def report_failure(self, error: LintkeepError) -> None:
        self.events.append(("failure", error))


def test_composite_reporter_fans_out_in_order() -> None:
    first, second = _Recorder(), _Recorder()
    composite = CompositeReporter(first, second)
    result = _result()
    error = EnumerationError("gone")

    composite.report_start(["/repo/a.js"])
    composite.report_batch(result)
    composite.report_failure(error)

    expected = [("start", ["/repo/a.js"]), ("batch", result), ("failure", error)]
    assert first.events == expected
    assert second.events == expected


def test_notifier_runs_command_only_when_batch_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[list[str]] = []

    def fake_run(argv: list[str], **kwargs: Any) -> subprocess.CompletedProcess[bytes]:
        calls.append(argv)
        return subprocess.CompletedProcess(argv, 0)

    monkeypatch.setattr("lintkeep.reporting.notify.subprocess.run", fake_run)
    notifier = CommandNotifier(["notify-send"], title="Lint")

    notifier.report_batch(_result(_outcome("a.js")))
    notifier.report_batch(_result(_outcome("a.js", ERROR)))
    notifier.report_batch(_result(_outcome("b.js", failure="boom")))

    assert calls == [
        ["notify-send", "Lint: lint failed (1 errors)"],
        ["notify-send", "Lint: 1 file(s) could not be linted"],
    ]


def test_notifier_swallows_missing_command(caplog: pytest.LogCaptureFixture) -> None:
    notifier = CommandNotifier(["lintkeep-no-such-notifier"])

    notifier.report_failure(EnumerationError("gone"))

    assert "Notification command failed" in caplog.text
