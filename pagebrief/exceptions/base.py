"""
Base exception classes for PageBrief.
"""

from typing import Any, Dict, Optional


class PageBriefError(Exception):
    """Base exception for all PageBrief errors."""

    def __init__(self,
                 message: str,
                 error_code: str = "PAGEBRIEF_ERROR",
                 context: Optional[Dict[str, Any]] = None,
                 retryable: bool = False,
                 cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.retryable = retryable
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error for API responses and logs."""
        data = {
            "error_code": self.error_code,
            "message": self.message,
            "retryable": self.retryable,
        }
        if self.context:
            data["context"] = self.context
        if self.cause is not None:
            data["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return data

    def __str__(self) -> str:
        return self.message


def create_error_context(**kwargs: Any) -> Dict[str, Any]:
    """Build an error context dict, dropping empty values."""
    return {key: value for key, value in kwargs.items() if value not in (None, "")}
