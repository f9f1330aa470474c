"""
Exception hierarchy for the finance dashboard.

Record-store failures are raised as distinct kinds so the API layer can
answer with targeted messages instead of a generic 500.
"""

from typing import Optional


class FinanceDashboardError(Exception):
    """
    Base exception for all finance dashboard errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary with additional error context
        original_error: Optional original exception that caused this error
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None,
        original_error: Optional[Exception] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def __str__(self) -> str:
        msg = self.message
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            msg = f"{msg} ({detail_str})"
        return msg


class NotFoundError(FinanceDashboardError):
    """Raised when a record with the given identifier does not exist."""
    status_code = 404


class DuplicateKeyError(FinanceDashboardError):
    """Raised when a budget collides with another on (category, month)."""
    status_code = 409


class ValidationFailedError(FinanceDashboardError):
    """Raised when a record fails validation after merging an update."""
    status_code = 400


class StoreError(FinanceDashboardError):
    """Raised when the record store cannot be read or written."""
    status_code = 503
