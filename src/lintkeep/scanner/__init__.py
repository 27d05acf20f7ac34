"""Incremental cache, classification and batch evaluation."""

from __future__ import annotations

from typing import Any

__all__ = ["BatchEvaluator", "evaluate_batch"]


def __getattr__(name: str) -> Any:
    """Lazily expose evaluator APIs to avoid import cycles at package import time."""
    if name in {"BatchEvaluator", "evaluate_batch"}:
        from .evaluator import BatchEvaluator, evaluate_batch

        exports = {"BatchEvaluator": BatchEvaluator, "evaluate_batch": evaluate_batch}
        return exports[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
