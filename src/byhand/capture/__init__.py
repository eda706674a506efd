"""Input signal classification and session recording."""
