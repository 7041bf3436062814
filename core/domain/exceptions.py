"""
Exception hierarchy for scope analysis parsing and tracker synchronization.
"""
from typing import Any, Dict, Optional


class ScopeSyncError(Exception):
    """Base exception for all scope sync errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ParseFailure(ScopeSyncError):
    """The extraction pipeline failed unexpectedly.

    Only raised for internal errors. A document in which nothing could be
    found is a valid (empty) parse result, not a failure.
    """

    def __init__(self, document_length: int):
        super().__init__(
            f"Failed to parse analysis document ({document_length} characters)",
            details={'document_length': document_length}
        )
        self.document_length = document_length


class MissingCredentials(ScopeSyncError):
    """Tracker credentials are absent or incomplete for a target."""

    def __init__(self, missing_fields: Optional[list] = None):
        missing_fields = missing_fields or []
        message = "Jira credentials not found for this project"
        if missing_fields:
            message += f" (missing: {', '.join(missing_fields)})"
        super().__init__(message, details={'missing_fields': missing_fields})
        self.missing_fields = missing_fields


class RemoteTrackerError(ScopeSyncError):
    """A call to the remote tracker failed."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None
    ):
        super().__init__(message, details={'status_code': status_code, 'payload': payload})
        self.status_code = status_code
        self.payload = payload


class RemoteValidationError(RemoteTrackerError):
    """The tracker rejected the request (HTTP 4xx)."""


class RemoteUnavailableError(RemoteTrackerError):
    """The tracker could not be reached (network, DNS, timeout or 5xx)."""


class DashboardFetchError(ScopeSyncError):
    """Dashboard data could not be read from the tracker."""
