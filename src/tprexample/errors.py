"""Errors raised by tpr-example.

Every failure is a TprExampleError. NotFoundError is the only condition the
program recovers from; everything else propagates up to the CLI.
"""

from typing import Any

from kubernetes.client.rest import ApiException


class TprExampleError(Exception):
    """Base class for all tpr-example errors."""


class ConfigResolutionError(TprExampleError):
    """Raised when no usable client configuration can be built."""


class SerializationError(TprExampleError):
    """Raised when an object cannot be encoded or a response cannot be decoded."""


class RegistrationTimeoutError(TprExampleError):
    """Raised when a freshly registered resource type never becomes established."""


class ApiRequestError(TprExampleError):
    """Raised when the API server answers with a non-successful status.

    Attributes:
        status: HTTP status code returned by the server.
        reason: HTTP reason phrase.
        body: Raw response body, usually a serialized Status object.
    """

    def __init__(self, status: int | None, reason: str | None = None, body: Any = None):
        self.status = status
        self.reason = reason
        self.body = body
        super().__init__(f"API request failed ({status} {reason})")


class NotFoundError(ApiRequestError):
    """Raised when the requested object does not exist (HTTP 404)."""


def from_api_exception(exc: ApiException) -> ApiRequestError:
    """Translate a kubernetes client ApiException into an ApiRequestError.

    Args:
        exc: The exception raised by the kubernetes client.

    Returns:
        NotFoundError for a 404 response, ApiRequestError otherwise.
    """
    error_class = NotFoundError if exc.status == 404 else ApiRequestError
    return error_class(exc.status, exc.reason, exc.body)


def is_not_found(exc: BaseException) -> bool:
    """Check whether an exception reports a missing object."""
    if isinstance(exc, ApiRequestError):
        return exc.status == 404
    return isinstance(exc, ApiException) and exc.status == 404
