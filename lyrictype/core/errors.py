from __future__ import annotations

from typing import Optional


class ApiError(Exception):
    """A request to the song/progress backend failed."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SessionInvariantError(RuntimeError):
    """Raised when a typing session reaches an impossible state (a bug, not user error)."""
