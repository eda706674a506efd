"""Incremental text reconstruction for human review."""
