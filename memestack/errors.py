"""Error taxonomy shared by the HTTP client, controllers and views."""
from __future__ import annotations

from typing import Any, Mapping


class MemestackError(RuntimeError):
    """Base class for every error raised by the client."""


class NetworkError(MemestackError):
    """Raised when the API could not be reached."""


class RequestTimeoutError(NetworkError):
    """Raised when a request exceeds the configured client-side timeout."""


class ApiError(MemestackError):
    """Raised for any non-2xx API response."""

    def __init__(self, status_code: int, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload


class AuthenticationError(ApiError):
    """401: the bearer token is missing, invalid or expired."""


class PermissionDeniedError(ApiError):
    """403: the caller may not touch this resource."""


class NotFoundError(ApiError):
    """404: the resource does not exist or is hidden from the caller."""


class RequestValidationError(ApiError):
    """400/422: the server rejected the payload."""


class ServerError(ApiError):
    """5xx responses."""


class ResponseFormatError(MemestackError):
    """Raised when a 2xx response body does not match the expected schema."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


class FormValidationError(MemestackError):
    """Client-side validation failure; blocks submission before any network call."""

    def __init__(self, field_errors: Mapping[str, str]) -> None:
        self.field_errors = dict(field_errors)
        summary = "; ".join(f"{field}: {message}" for field, message in self.field_errors.items())
        super().__init__(summary or "Invalid form data")


class WorkflowError(MemestackError):
    """Raised when a collaboration status transition is not allowed."""


_STATUS_ERRORS: dict[int, type[ApiError]] = {
    400: RequestValidationError,
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
    422: RequestValidationError,
}


def error_for_status(status_code: int, message: str, payload: Any = None) -> ApiError:
    """Return the ApiError subclass instance matching an HTTP status code."""

    if status_code >= 500:
        return ServerError(status_code, message, payload)
    error_cls = _STATUS_ERRORS.get(status_code, ApiError)
    return error_cls(status_code, message, payload)


def user_message(exc: BaseException) -> str:
    """Convert an exception into the alert string shown to the user."""

    if isinstance(exc, AuthenticationError):
        return "Please log in again to continue."
    if isinstance(exc, PermissionDeniedError):
        return "You don't have permission to perform this action."
    if isinstance(exc, ServerError):
        return "Server error. Please try again later."
    if isinstance(exc, RequestTimeoutError):
        return "The server took too long to respond. Please try again."
    if isinstance(exc, NetworkError):
        return "Unable to reach the server. Check your connection and try again."
    if isinstance(exc, ResponseFormatError):
        return "The server sent an unexpected response. Please try again."
    if isinstance(exc, ApiError):
        return exc.message or f"Request failed ({exc.status_code})"
    if isinstance(exc, (FormValidationError, WorkflowError)):
        return str(exc)
    return "Something went wrong. Please try again."


__all__ = [
    "ApiError",
    "AuthenticationError",
    "FormValidationError",
    "MemestackError",
    "NetworkError",
    "NotFoundError",
    "PermissionDeniedError",
    "RequestTimeoutError",
    "RequestValidationError",
    "ResponseFormatError",
    "ServerError",
    "WorkflowError",
    "error_for_status",
    "user_message",
]
