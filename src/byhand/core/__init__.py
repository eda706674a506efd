"""Data contracts, defaults, and shared utilities."""
