"""
PubChem client exception types.

Every failure surfaces as a subclass of PubChemError:
- IdentifierError: an identifier value was rejected before any request
- QueryError: the requested property selection cannot form a request
- RequestError: the request itself failed (network error or non-2xx status)
- ParseError: a successful response did not have the expected shape
"""

from typing import Any


class PubChemError(Exception):
    """Base exception for all PubChem client errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: Any = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class IdentifierError(PubChemError, ValueError):
    """Raised when a compound identifier is empty or malformed."""

    def __init__(self, message: str, namespace: str | None = None):
        super().__init__(message)
        self.namespace = namespace


class QueryError(PubChemError, ValueError):
    """Raised when a property selection is empty or names unknown properties."""


# =============================================================================
# Request Errors
# =============================================================================


class RequestError(PubChemError):
    """Raised when the HTTP request fails or returns a non-2xx status."""


class RequestTimeoutError(RequestError):
    """Raised when the transport times out before a response arrives."""

    def __init__(self, message: str = "Request timed out", timeout: float | None = None):
        super().__init__(message)
        self.timeout = timeout


class ApiError(RequestError):
    """
    The PUG REST API answered with an error status.

    ``code`` holds the ``PUGREST.*`` fault code when the response carried one.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        details: list[str] | None = None,
    ):
        super().__init__(message, status_code=status_code)
        self.code = code
        self.details = details or []

    def __str__(self) -> str:
        base = super().__str__()
        if self.code:
            return f"[{self.code}] {base}"
        return base


class BadRequestError(ApiError):
    """Request is improperly formed (HTTP 400), often an invalid SMILES."""


class NotFoundError(ApiError):
    """The input record was not found (HTTP 404)."""


class NotAllowedError(ApiError):
    """Request not allowed (HTTP 405)."""


class ServerError(ApiError):
    """Problem on the server side (HTTP 500)."""


class UnimplementedError(ApiError):
    """The requested operation is not implemented by the server (HTTP 501)."""


class ServerBusyError(ApiError):
    """Too many requests or server busy (HTTP 503)."""


class ApiTimeoutError(ApiError):
    """The server timed out, from overload or too broad a request (HTTP 504)."""


# Fault code -> exception type
FAULT_CODE_ERRORS: dict[str, type[ApiError]] = {
    "PUGREST.BadRequest": BadRequestError,
    "PUGREST.NotFound": NotFoundError,
    "PUGREST.NotAllowed": NotAllowedError,
    "PUGREST.ServerError": ServerError,
    "PUGREST.Unimplemented": UnimplementedError,
    "PUGREST.ServerBusy": ServerBusyError,
    "PUGREST.Timeout": ApiTimeoutError,
}

# HTTP status -> exception type, used when no fault code is available
STATUS_CODE_ERRORS: dict[int, type[ApiError]] = {
    400: BadRequestError,
    404: NotFoundError,
    405: NotAllowedError,
    500: ServerError,
    501: UnimplementedError,
    503: ServerBusyError,
    504: ApiTimeoutError,
}


# =============================================================================
# Parse Errors
# =============================================================================


class ParseError(PubChemError):
    """Raised when a response body does not match the expected shape."""

    def __init__(self, message: str, field: str | None = None, response_body: Any = None):
        super().__init__(message, response_body=response_body)
        self.field = field
