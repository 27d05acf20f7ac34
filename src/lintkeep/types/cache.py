"""Typed cache payload structures."""

from __future__ import annotations

from typing import TypedDict


class CacheFileEntry(TypedDict):
    """Persisted state for a single tracked file."""

    path: str
    modified_at: int
    clean: bool


class CachePayload(TypedDict):
    """Top-level cache payload persisted to disk."""

    version: int
    files: dict[str, CacheFileEntry]
