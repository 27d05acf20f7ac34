"""Constants for the subprocess analysis engine adapter."""

from __future__ import annotations

PATH_PLACEHOLDER: str = "{path}"

# ESLint exits 0 when clean and 1 when error-severity messages were reported.
ENGINE_OK_RETURN_CODES: frozenset[int] = frozenset({0, 1})

ESLINT_SEVERITY_WARNING: int = 1
ESLINT_SEVERITY_ERROR: int = 2

ENGINE_STDERR_PREVIEW_CHARS: int = 400
