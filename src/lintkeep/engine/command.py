"""Subprocess engine speaking the ESLint JSON formatter protocol."""

from __future__ import annotations

import json
import logging
import subprocess
from collections.abc import Sequence

from lintkeep.constants.engine import (
    ENGINE_OK_RETURN_CODES,
    ENGINE_STDERR_PREVIEW_CHARS,
    ESLINT_SEVERITY_ERROR,
    ESLINT_SEVERITY_WARNING,
    PATH_PLACEHOLDER,
)
from lintkeep.exceptions import AnalysisError
from lintkeep.model import AnalysisReport, Finding
from lintkeep.types import Severity

logger = logging.getLogger(__name__)


class CommandEngine:
    """Run an external linter with the file content on stdin.

    The command must print ESLint-style JSON (``eslint --stdin --format json``
    does). ``{path}`` in any argument is replaced with the file path, e.g.
    ``["eslint", "--stdin", "--stdin-filename", "{path}", "--format", "json"]``.
    """

    def __init__(self, command: Sequence[str], *, timeout_seconds: float | None = None) -> None:
        if not command:
            raise ValueError("command must not be empty")
        self._command = tuple(command)
        self._timeout_seconds = timeout_seconds

    @property
    def command(self) -> tuple[str, ...]:
        return self._command

    def build_argv(self, path: str) -> list[str]:
        return [arg.replace(PATH_PLACEHOLDER, path) for arg in self._command]

    def analyze(self, content: str, *, path: str) -> AnalysisReport:
        argv = self.build_argv(path)
        logger.debug("Running %s for %s", argv[0], path)
        try:
            completed = subprocess.run(
                argv,
                input=content,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self._timeout_seconds,
                check=False,
            )
        except FileNotFoundError as exc:
            raise AnalysisError(f"Analysis engine not found: {argv[0]}") from exc
        except subprocess.TimeoutExpired as exc:
            raise AnalysisError(f"Analysis engine timed out after {exc.timeout}s") from exc
        except OSError as exc:
            raise AnalysisError(f"Analysis engine could not start: {exc}") from exc

        if completed.returncode not in ENGINE_OK_RETURN_CODES:
            stderr = completed.stderr.strip()[:ENGINE_STDERR_PREVIEW_CHARS]
            raise AnalysisError(f"Analysis engine exited with code {completed.returncode}: {stderr or 'no output'}")

        return parse_eslint_report(completed.stdout)


def parse_eslint_report(raw: str) -> AnalysisReport:
    """Parse ESLint JSON formatter output into an :class:`AnalysisReport`.

    Counts come from ``errorCount``/``warningCount`` when present and are
    otherwise derived from the messages. Messages keep their reported order.
    """
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise AnalysisError(f"Analysis engine produced invalid JSON: {exc}") from exc

    if isinstance(payload, dict):
        payload = [payload]
    if not isinstance(payload, list):
        raise AnalysisError("Analysis engine output must be a list of results")

    findings: list[Finding] = []
    error_count = 0
    warning_count = 0
    for result in payload:
        if not isinstance(result, dict):
            raise AnalysisError("Analysis engine result entries must be objects")
        messages = result.get("messages", [])
        if not isinstance(messages, list):
            raise AnalysisError("Analysis engine result 'messages' must be a list")

        result_findings = [finding for finding in (_parse_message(item) for item in messages) if finding is not None]
        findings.extend(result_findings)
        error_count += _count(result.get("errorCount"), result_findings, "error")
        warning_count += _count(result.get("warningCount"), result_findings, "warning")

    return AnalysisReport(error_count=error_count, warning_count=warning_count, findings=tuple(findings))


def _parse_message(message: object) -> Finding | None:
    if not isinstance(message, dict):
        return None
    severity = _severity(message.get("severity"), fatal=message.get("fatal") is True)
    if severity is None:
        return None
    rule_id = message.get("ruleId")
    return Finding(
        severity=severity,
        line=_int_or_zero(message.get("line")),
        column=_int_or_zero(message.get("column")),
        message=str(message.get("message", "")),
        rule_id=rule_id if isinstance(rule_id, str) else None,
    )


def _severity(raw: object, *, fatal: bool) -> Severity | None:
    if fatal or raw == ESLINT_SEVERITY_ERROR:
        return "error"
    if raw == ESLINT_SEVERITY_WARNING:
        return "warning"
    return None


def _count(raw: object, findings: list[Finding], severity: Severity) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool) and raw >= 0:
        return raw
    return sum(1 for finding in findings if finding.severity == severity)


def _int_or_zero(value: object) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0
