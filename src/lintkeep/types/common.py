"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

Severity: TypeAlias = Literal["warning", "error"]
EventType: TypeAlias = Literal["change", "add", "remove"]
