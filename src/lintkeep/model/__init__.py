"""Core data models for Lintkeep."""

from .entities import (
    AnalysisReport,
    BatchResult,
    Classification,
    FileOutcome,
    FileRecord,
    Finding,
)

__all__ = [
    "AnalysisReport",
    "BatchResult",
    "Classification",
    "FileOutcome",
    "FileRecord",
    "Finding",
]
