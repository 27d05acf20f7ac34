"""Shared constants for Lintkeep."""
