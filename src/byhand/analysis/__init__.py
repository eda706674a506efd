"""Pure reducers over a finalized event log."""
