# core/exceptions.py
"""Error kinds raised by the store and the services.

Every error carries a stable ``kind`` string and the HTTP status the API
exception handler answers with, so callers can tell failures apart and pick
their own retry policy.
"""
from typing import Any, Dict, Optional


class HubError(Exception):
    """Base exception for REC Hub."""

    kind = "error"
    status_code = 500

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)

    def payload(self) -> Dict[str, Any]:
        return {"error": self.kind, "detail": self.message}


class NotFoundError(HubError):
    """Raised when an operation targets a nonexistent id."""

    kind = "not_found"
    status_code = 404

    def __init__(self, entity: str, record_id: Any):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} not found")


class UnauthenticatedError(HubError):
    """Raised when there is no valid session."""

    kind = "unauthenticated"
    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class PermissionDenied(HubError):
    """Raised when the user lacks a capability."""

    kind = "forbidden"
    status_code = 403


class ValidationFailure(HubError):
    """Raised for a malformed create/update payload."""

    kind = "validation_failure"
    status_code = 422


class ConflictError(HubError):
    """Raised when a unique field already exists."""

    kind = "conflict"
    status_code = 409


class StoreUnavailableError(HubError):
    """Raised on transient database/backend failure."""

    kind = "store_unavailable"
    status_code = 503


class CascadeDeleteError(HubError):
    """Raised when one step of a database cascade delete fails.

    The whole delete has been rolled back; ``step`` names the step that failed
    (``rows``, ``tables`` or ``database``).
    """

    kind = "cascade_delete_failed"
    status_code = 500

    def __init__(self, database_id: int, step: str, cause: Optional[BaseException] = None):
        self.database_id = database_id
        self.step = step
        self.cause = cause
        reason = f": {cause}" if cause else ""
        super().__init__(f"Deleting database {database_id} failed at step '{step}'{reason}")

    def payload(self) -> Dict[str, Any]:
        data = super().payload()
        data.update({"step": self.step, "database_id": self.database_id})
        return data
