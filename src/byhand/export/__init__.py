"""Outbound payloads for persistence and verification collaborators."""
