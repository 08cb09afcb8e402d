# ============================================================================
# REST ERRORS
# ============================================================================
# STATUS: Foundation - Request-level error types
# PURPOSE: Errors that abort a request and render as {code, message, data}
# ============================================================================
"""
REST Errors

Request-level failures carry a machine-readable code, a human message and
an HTTP status. The API layer renders them as:

    {"code": "rest_forbidden", "message": "...", "data": {"status": 403}}

Per-field write failures are NOT errors; they are reported inline as
FieldOutcome.FAILED.
"""

from typing import Any, Dict, List, Optional


class RestError(Exception):
    """Base class for errors that abort the whole request."""

    code: str = "rest_error"
    status: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status: Optional[int] = None,
        **data: Any,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status is not None:
            self.status = status
        self.data = data

    def to_dict(self) -> Dict[str, Any]:
        """Error body in the host's REST error shape."""
        return {
            "code": self.code,
            "message": self.message,
            "data": {"status": self.status, **self.data},
        }


class MissingParamError(RestError):
    """A required parameter was not supplied."""

    code = "rest_missing_callback_param"
    status = 400

    def __init__(self, params: List[str]):
        super().__init__(
            f"Missing parameter(s): {', '.join(params)}",
            params=params,
        )


class InvalidParamError(RestError):
    """A parameter failed its type check or validation callback."""

    code = "rest_invalid_param"
    status = 400

    def __init__(self, details: Dict[str, str]):
        super().__init__(
            f"Invalid parameter(s): {', '.join(details)}",
            params=details,
            details=details,
        )


class ForbiddenError(RestError):
    """Caller lacks a capability. 401 when not authenticated, 403 otherwise."""

    code = "rest_forbidden"
    status = 403


class NoFieldsProvidedError(RestError):
    """None of the managed meta fields was present in the request."""

    code = "no_fields_provided"
    status = 400

    def __init__(self):
        super().__init__("No Rank Math fields were provided for update.")


__all__ = [
    "RestError",
    "MissingParamError",
    "InvalidParamError",
    "ForbiddenError",
    "NoFieldsProvidedError",
]
