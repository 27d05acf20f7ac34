"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "LINTKEEP"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ LINTKEEP",
    "     // incremental lint runner",
)
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} lints only what changed"))
NOTIFY_TITLE: str = "Lintkeep"
