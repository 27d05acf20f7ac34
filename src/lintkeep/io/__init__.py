"""Shared file I/O helpers."""

from .files import modified_at_ms, read_source
from .json_io import load_json_file, write_json_atomic

__all__ = ["load_json_file", "modified_at_ms", "read_source", "write_json_atomic"]
