"""External failure notifications through a user-supplied command."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from lintkeep.constants.branding import NOTIFY_TITLE
from lintkeep.exceptions import LintkeepError
from lintkeep.model import BatchResult

logger = logging.getLogger(__name__)


class CommandNotifier:
    """Run ``command`` with a message appended whenever a batch does not pass.

    Example: ``["notify-send", "Lintkeep"]``. A notifier problem is logged and
    never affects the batch outcome.
    """

    def __init__(self, command: Sequence[str], *, title: str = NOTIFY_TITLE) -> None:
        self._command = tuple(command)
        self._title = title

    def report_start(self, changed: Sequence[str]) -> None:
        return None

    def report_batch(self, result: BatchResult) -> None:
        if result.passed:
            return
        if result.has_blocking_findings:
            self._send(f"{self._title}: lint failed ({result.error_count} errors)")
        else:
            self._send(f"{self._title}: {len(result.failures)} file(s) could not be linted")

    def report_failure(self, error: LintkeepError) -> None:
        self._send(f"{self._title}: lint run failed ({error})")

    def _send(self, message: str) -> None:
        try:
            subprocess.run([*self._command, message], check=False, capture_output=True, timeout=10)
        except (OSError, subprocess.SubprocessError) as exc:
            logger.warning("Notification command failed: %s", exc)
