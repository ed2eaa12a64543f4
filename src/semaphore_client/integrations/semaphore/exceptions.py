"""Semaphore API exceptions."""

from __future__ import annotations


class SemaphoreError(Exception):
    """Base exception for Semaphore errors."""

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize exception.

        Args:
            message: Error message.
            details: Additional details.
        """
        super().__init__(message)
        self.message = message
        self.details = details


class SemaphoreConnectionError(SemaphoreError):
    """Raised when the HTTP exchange with Semaphore fails.

    This covers DNS resolution, TLS, refused connections, timeouts and
    protocol errors. A response with an unexpected status is not a
    connection error.
    """

    def __init__(
        self,
        message: str,
        details: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message.
            details: Additional details.
            original_error: The transport exception that caused this error.
        """
        super().__init__(message, details)
        self.original_error = original_error


class SemaphoreAPIError(SemaphoreError):
    """Raised when Semaphore answers with a status other than 200.

    Attributes:
        status_code: HTTP status code returned by upstream.
        response_body: Raw response body text, verbatim.
    """

    def __init__(
        self,
        status_code: int,
        response_body: str = "",
        endpoint: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            status_code: HTTP status code.
            response_body: Raw response body text.
            endpoint: The API endpoint that was called.
        """
        super().__init__(
            f'http status {status_code} with message "{response_body}" received from upstream',
            details=endpoint,
        )
        self.status_code = status_code
        self.response_body = response_body
        self.endpoint = endpoint


class SemaphoreModelError(SemaphoreError):
    """Base for local shape failures raised before any network call."""


class SemaphoreValidationError(SemaphoreModelError):
    """Raised when a resource fails validation (e.g. blank name)."""


class SemaphoreSerializationError(SemaphoreModelError):
    """Raised when a resource cannot be serialized or deserialized."""


class SemaphoreConfigError(SemaphoreError):
    """Raised when configuration is invalid or missing."""
