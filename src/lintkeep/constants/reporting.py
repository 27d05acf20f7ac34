"""Constants for stdout formatting."""

from __future__ import annotations

SYMBOL_TICK: str = "✔"
SYMBOL_CROSS: str = "✖"
SYMBOL_WARNING: str = "⚠"
SEPARATOR_WIDTH: int = 56

# ANSI escape codes for terminal colouring.
ANSI_RESET: str = "\033[0m"
ANSI_BOLD: str = "\033[1m"
ANSI_UNDERLINE: str = "\033[4m"
ANSI_RED: str = "\033[31;1m"
ANSI_YELLOW: str = "\033[33;1m"
ANSI_GREEN: str = "\033[32;1m"
ANSI_BLUE: str = "\033[34;1m"
ANSI_DIM: str = "\033[2m"

SEVERITY_COLORS: dict[str, str] = {
    "error": ANSI_RED,
    "warning": ANSI_YELLOW,
}
SEVERITY_SYMBOLS: dict[str, str] = {
    "error": SYMBOL_CROSS,
    "warning": SYMBOL_WARNING,
}
