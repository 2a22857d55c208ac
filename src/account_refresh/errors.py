"""
Error types raised by the frame waiter and the statement pipeline.
"""

from typing import Optional


class AutomationError(Exception):
    """Base class for all account_refresh errors."""


class NotFoundError(AutomationError):
    """
    Raised when a predicate is not satisfied in any frame before the timeout.

    Attributes:
        description: Human-readable predicate description
        timeout_ms: Timeout that elapsed (None for unbounded waits)
        contexts_searched: Number of frames probed on each poll
    """

    def __init__(
        self,
        description: str,
        timeout_ms: Optional[int] = None,
        contexts_searched: int = 0,
    ):
        self.description = description
        self.timeout_ms = timeout_ms
        self.contexts_searched = contexts_searched
        super().__init__(
            f"Timeout: {description} not found in any of {contexts_searched} "
            f"frame(s) after {timeout_ms}ms"
        )


class AccessDeniedError(AutomationError):
    """
    Raised when a frame's document cannot be read.

    Covers detached frames, frames mid-navigation and anything else the
    browser refuses to evaluate in. Probes report this condition as an
    inaccessible result instead of raising.
    """

    def __init__(self, frame_label: str, reason: str):
        self.frame_label = frame_label
        self.reason = reason
        super().__init__(f"Frame '{frame_label}' is not accessible: {reason}")


class WaitCancelledError(AutomationError):
    """Raised when a wait is aborted through its cancel event."""

    def __init__(self, description: str):
        self.description = description
        super().__init__(f"Wait for {description} was cancelled")
