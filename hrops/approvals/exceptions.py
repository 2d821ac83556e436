"""Errors raised by the approval engine. Views map them to HTTP status codes."""
from typing import Any, Optional


class ApprovalError(Exception):
    """Base class for every workflow error."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFound(ApprovalError):
    """Unknown application, alarm or actor key."""


class InvalidStateError(ApprovalError):
    """Current status does not allow the requested step (includes the concurrent loser)."""


class ForbiddenError(ApprovalError):
    """Actor lacks the role or the team/division scope for the decision."""


class ValidationError(ApprovalError):
    """Bad input, e.g. a rejection without a reason."""
