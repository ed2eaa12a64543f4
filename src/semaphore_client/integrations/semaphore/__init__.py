"""Semaphore CI/CD API integration."""

from semaphore_client.integrations.semaphore.client import RawResponse, SemaphoreClient
from semaphore_client.integrations.semaphore.config import SemaphoreConfig
from semaphore_client.integrations.semaphore.exceptions import (
    SemaphoreAPIError,
    SemaphoreConfigError,
    SemaphoreConnectionError,
    SemaphoreError,
    SemaphoreModelError,
    SemaphoreSerializationError,
    SemaphoreValidationError,
)

__all__ = [
    "RawResponse",
    "SemaphoreAPIError",
    "SemaphoreClient",
    "SemaphoreConfig",
    "SemaphoreConfigError",
    "SemaphoreConnectionError",
    "SemaphoreError",
    "SemaphoreModelError",
    "SemaphoreSerializationError",
    "SemaphoreValidationError",
]
