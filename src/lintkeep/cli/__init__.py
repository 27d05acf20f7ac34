"""Command-line interface for Lintkeep."""
