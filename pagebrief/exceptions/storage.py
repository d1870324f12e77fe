"""
Storage and request-guard errors.
"""

from typing import Optional

from .base import PageBriefError, create_error_context


class StorageError(PageBriefError):
    """Key-value storage read or write failed."""

    def __init__(self,
                 message: str,
                 operation: str = "",
                 key: Optional[str] = None,
                 cause: Optional[Exception] = None):
        super().__init__(
            message=message,
            error_code="STORAGE_ERROR",
            context=create_error_context(operation=operation, key=key),
            retryable=True,
            cause=cause,
        )


class AlreadyProcessingError(PageBriefError):
    """A summarization is already in flight for the target."""

    def __init__(self, target_id: str):
        super().__init__(
            message=f"A summary is already being generated for {target_id}",
            error_code="ALREADY_PROCESSING",
            context={"target_id": target_id},
        )
        self.target_id = target_id
