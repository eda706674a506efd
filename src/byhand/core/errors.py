"""Exception taxonomy for the capture core."""

from __future__ import annotations


class AlreadyFinalized(RuntimeError):
    """Raised when a finalized session is finalized or mutated again."""

    def __init__(self, session_id: str, operation: str = "finalize") -> None:
        super().__init__(
            f"Session {session_id} is already finalized; {operation} is not allowed"
        )
        self.session_id = session_id
        self.operation = operation
