"""
Domain errors raised by services, repositories and renderers.

Each error carries the HTTP status it maps to; the handlers registered in
``avotrace.main`` turn them into JSON responses.
"""
from typing import Any, Dict, List, Optional


class AvoTraceError(Exception):
    status_code = 500
    error_type = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "error_type": self.error_type}


class NotFoundError(AvoTraceError):
    """Missing lot, farm, activity or other record"""

    status_code = 404
    error_type = "not_found"

    def __init__(self, entity: str, identifier: Any):
        super().__init__(f"{entity} {identifier} not found")
        self.entity = entity
        self.identifier = identifier


class ValidationError(AvoTraceError):
    """Input that violates the data model, with field-level detail"""

    status_code = 422
    error_type = "validation_error"

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, errors=[{"loc": [field], "msg": message}])

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["errors"] = self.errors
        return payload


class ConflictError(AvoTraceError):
    """Uniqueness violation (farm code, username, lot number)"""

    status_code = 409
    error_type = "conflict"


class AuthenticationError(AvoTraceError):
    """Unknown username or wrong password"""

    status_code = 401
    error_type = "authentication_failed"


class LotNumberExhaustedError(ConflictError):
    error_type = "lot_number_exhausted"


class RenderError(AvoTraceError):
    """Barcode or PDF generation failure"""

    status_code = 500
    error_type = "render_error"
