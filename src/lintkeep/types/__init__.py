"""Shared type aliases for Lintkeep."""

from .cache import CacheFileEntry, CachePayload
from .common import EventType, Severity

__all__ = [
    "CacheFileEntry",
    "CachePayload",
    "EventType",
    "Severity",
]
