"""Exception types raised across the issue bridge."""

from __future__ import annotations


class IssueBridgeError(Exception):
    """Base class for errors handled at the Slack listener boundary."""


class DecodeError(IssueBridgeError):
    """Raised when a correlation token is missing or cannot be decoded."""


class UpstreamCallError(IssueBridgeError):
    """Raised when a Slack or GitHub API call fails."""

    def __init__(self, operation: str, error: str, status_code: int | None = None) -> None:
        super().__init__(f"{operation} failed: {error}")
        self.operation = operation
        self.error = error
        self.status_code = status_code


class ValidationGap(IssueBridgeError):
    """Raised when submitted modal state is missing a value or has the wrong shape."""

    def __init__(self, block_id: str, message: str) -> None:
        super().__init__(f"{block_id}: {message}")
        self.block_id = block_id
        self.message = message
