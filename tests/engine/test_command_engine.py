"""Tests for the subprocess analysis engine and ESLint JSON parsing."""

from __future__ import annotations

import json
import sys

import pytest

from lintkeep.engine import AnalysisEngine, CommandEngine, parse_eslint_report
from lintkeep.exceptions import AnalysisError
from lintkeep.model import Finding

# Minimal stand-in linter: flags every line containing "debugger" as an error
# and echoes the path it was given as the first message.
FAKE_LINTER = """
import json, sys
content = sys.stdin.read()
messages = [{"ruleId": "echo-path", "severity": 1, "message": sys.argv[1], "line": 1, "column": 1}]
for number, line in enumerate(content.splitlines(), start=1):
    if "debugger" in line:
        messages.append({"ruleId": "no-debugger", "severity": 2, "message": "Unexpected 'debugger' statement.",
                         "line": number, "column": line.index("debugger") + 1})
errors = sum(1 for m in messages if m["severity"] == 2)
print(json.dumps([{"filePath": sys.argv[1], "messages": messages,
                   "errorCount": errors, "warningCount": len(messages) - errors}]))
sys.exit(1 if errors else 0)
"""


def _fake_linter_engine(**kwargs: float) -> CommandEngine:
    return CommandEngine([sys.executable, "-c", FAKE_LINTER, "{path}"], **kwargs)


def test_command_engine_satisfies_protocol() -> None:
    assert isinstance(_fake_linter_engine(), AnalysisEngine)


def test_build_argv_substitutes_path() -> None:
    engine = CommandEngine(["eslint", "--stdin", "--stdin-filename", "{path}"])

    assert engine.build_argv("/src/a.js") == ["eslint", "--stdin", "--stdin-filename", "/src/a.js"]
    assert engine.command == ("eslint", "--stdin", "--stdin-filename", "{path}")


def test_empty_command_rejected() -> None:
    with pytest.raises(ValueError):
        CommandEngine([])


def test_analyze_clean_content() -> None:
    report = _fake_linter_engine().analyze("let a = 1;\n", path="/src/a.js")

    assert report.error_count == 0
    assert report.warning_count == 1
    assert report.findings[0].message == "/src/a.js"


def test_analyze_reports_errors_on_exit_code_one() -> None:
    report = _fake_linter_engine().analyze("let a;\n  debugger;\n", path="/src/a.js")

    assert report.error_count == 1
    assert report.findings[1] == Finding("error", 2, 3, "Unexpected 'debugger' statement.", "no-debugger")


def test_missing_executable_raises_analysis_error() -> None:
    engine = CommandEngine(["lintkeep-no-such-linter-binary", "--stdin"])

    with pytest.raises(AnalysisError, match="not found"):
        engine.analyze("", path="/src/a.js")


def test_unexpected_exit_code_raises_analysis_error() -> None:
    engine = CommandEngine([sys.executable, "-c", "import sys; sys.stderr.write('config broken'); sys.exit(2)"])

    with pytest.raises(AnalysisError, match="config broken"):
        engine.analyze("", path="/src/a.js")


def test_timeout_raises_analysis_error() -> None:
    engine = CommandEngine([sys.executable, "-c", "import time; time.sleep(5)"], timeout_seconds=0.2)

    with pytest.raises(AnalysisError, match="timed out"):
        engine.analyze("", path="/src/a.js")


def test_parse_uses_reported_counts() -> None:
    raw = json.dumps(
        [
            {
                "messages": [
                    {"ruleId": "semi", "severity": 2, "message": "Missing semicolon.", "line": 3, "column": 10},
                    {"ruleId": "no-unused-vars", "severity": 1, "message": "'x' is unused.", "line": 1, "column": 5},
                ],
                "errorCount": 1,
                "warningCount": 1,
            }
        ]
    )

    report = parse_eslint_report(raw)

    assert (report.error_count, report.warning_count) == (1, 1)
    assert [finding.rule_id for finding in report.findings] == ["semi", "no-unused-vars"]


def test_parse_derives_counts_and_handles_fatal() -> None:
    raw = json.dumps({"messages": [{"fatal": True, "message": "Parsing error: Unexpected token", "line": 4}]})

    report = parse_eslint_report(raw)

    assert report.error_count == 1
    assert report.findings == (Finding("error", 4, 0, "Parsing error: Unexpected token", None),)


def test_parse_skips_unknown_severity() -> None:
    raw = json.dumps([{"messages": [{"severity": 0, "message": "off"}]}])

    report = parse_eslint_report(raw)

    assert report.findings == ()
    assert report.error_count == 0


@pytest.mark.parametrize(
    "raw",
    [
        pytest.param("not json", id="invalid-json"),
        pytest.param('"text"', id="string"),
        pytest.param("[1]", id="non-object-entry"),
        pytest.param('[{"messages": {}}]', id="messages-not-list"),
    ],
)
def test_parse_rejects_malformed_output(raw: str) -> None:
    with pytest.raises(AnalysisError):
        parse_eslint_report(raw)
