"""Error taxonomy for the city info API.

Every error carries a machine-readable code and the HTTP status the API layer
renders it with. Handlers live in app.api.error_handlers.
"""
from typing import Any, Dict, List, Optional


class CityInfoError(Exception):
    """Base class for all domain and infrastructure errors."""

    code = "CITY_INFO_ERROR"
    http_status = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_response(self) -> Dict[str, Any]:
        """Render the error body returned to clients."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class NotFoundError(CityInfoError):
    """Missing city or point of interest, including cross-city id mismatches."""

    code = "NOT_FOUND"
    http_status = 404


class ValidationError(CityInfoError):
    """A field constraint was violated.

    ``field_errors`` maps each offending field to its messages.
    """

    code = "VALIDATION_FAILED"
    http_status = 422

    def __init__(self, field_errors: Dict[str, List[str]], message: str = "One or more fields are invalid"):
        super().__init__(message, details={"fields": field_errors})
        self.field_errors = field_errors


class PatchDocumentError(CityInfoError):
    """The partial-update document itself is malformed."""

    code = "MALFORMED_PATCH"
    http_status = 400

    def __init__(self, message: str, operation_index: Optional[int] = None):
        details = {"operation": operation_index} if operation_index is not None else None
        super().__init__(message, details=details)
        self.operation_index = operation_index


class StoreFailureError(CityInfoError):
    """The underlying store rejected a commit."""

    code = "STORE_FAILURE"
    http_status = 500


class AuthenticationError(CityInfoError):
    """Missing, malformed or rejected bearer credentials."""

    code = "UNAUTHORIZED"
    http_status = 401
