"""Keystroke telemetry capture and integrity scoring for hand-typed documents."""

__version__ = "0.1.0"
