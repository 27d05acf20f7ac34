"""Shared pytest fixtures: source-tree builders and an in-process analysis engine."""

from __future__ import annotations

import os
import threading
import time
from collections.abc import Callable
from pathlib import Path

import pytest

from lintkeep.exceptions import AnalysisError
from lintkeep.model import AnalysisReport, Finding

# Far enough from the epoch that every filesystem stores it exactly.
BASE_MTIME_MS: int = 1_700_000_000_000


class FakeEngine:
    """Engine driven by markers in the file content.

    ``ERROR`` yields an error finding, ``WARN`` a warning, ``CRASH`` raises
    :class:`AnalysisError` and ``BOOM`` raises an unexpected exception.
    """

    def __init__(self, *, delays: dict[str, float] | None = None) -> None:
        self.calls: list[str] = []
        self._delays = delays or {}
        self._lock = threading.Lock()

    def analyze(self, content: str, *, path: str) -> AnalysisReport:
        with self._lock:
            self.calls.append(path)
        delay = self._delays.get(Path(path).name)
        if delay:
            time.sleep(delay)
        if "CRASH" in content:
            raise AnalysisError("parser exploded")
        if "BOOM" in content:
            raise RuntimeError("unexpected engine bug")

        findings: list[Finding] = []
        for line_no, line in enumerate(content.splitlines(), start=1):
            if "ERROR" in line:
                findings.append(Finding("error", line_no, 1, "Unexpected error marker", "no-error"))
            if "WARN" in line:
                findings.append(Finding("warning", line_no, 1, "Unexpected warn marker", "no-warn"))
        errors = sum(1 for finding in findings if finding.is_error)
        return AnalysisReport(error_count=errors, warning_count=len(findings) - errors, findings=tuple(findings))


def set_mtime_ms(path: Path, mtime_ms: int) -> None:
    ns = mtime_ms * 1_000_000
    os.utime(path, ns=(ns, ns))


@pytest.fixture()
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture()
def engine_factory() -> Callable[..., FakeEngine]:
    """Return the engine class so tests can pass per-file delays."""
    return FakeEngine


@pytest.fixture()
def write_source() -> Callable[..., Path]:
    """Return a helper that writes a file and pins its modification time."""

    def _write(path: Path, content: str = "", *, mtime_ms: int = BASE_MTIME_MS) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        set_mtime_ms(path, mtime_ms)
        return path

    return _write


@pytest.fixture()
def touch_mtime() -> Callable[[Path, int], None]:
    return set_mtime_ms


@pytest.fixture()
def base_mtime_ms() -> int:
    return BASE_MTIME_MS


@pytest.fixture()
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root.resolve()
