# devflow/core/errors.py
"""
Error kinds raised by the service layer.

Every operation either returns its result or raises one of these; the API
layer turns them into the `{"success": false, "error": {...}}` envelope.
"""


class DevflowError(Exception):
    """Base exception for all service failures."""

    code = "INTERNAL_ERROR"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        """Convert to the standard error envelope."""
        return {"success": False, "error": {"code": self.code, "message": self.message}}


class NotFoundError(DevflowError):
    """A referenced document does not exist."""

    code = "NOT_FOUND"
    http_status = 404

    def __init__(self, resource: str, identifier):
        super().__init__(f"{resource} not found: {identifier}")
        self.resource = resource
        self.identifier = identifier


class ValidationError(DevflowError):
    """Input rejected before touching the store."""

    code = "VALIDATION_ERROR"
    http_status = 400

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class StoreUnavailableError(DevflowError):
    """The store could not be reached or refused the operation."""

    code = "STORE_UNAVAILABLE"
    http_status = 503

    def __init__(self, operation: str, reason: str = ""):
        message = f"Store unavailable during {operation}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.operation = operation


class PartialFailureError(DevflowError):
    """A multi-step operation failed after it started writing (changes rolled back)."""

    code = "PARTIAL_FAILURE"
    http_status = 500

    def __init__(self, operation: str, step: str, reason: str = ""):
        message = f"{operation} failed at step '{step}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.operation = operation
        self.step = step
