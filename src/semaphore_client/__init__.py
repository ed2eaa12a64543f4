"""Client library for the Semaphore CI/CD REST API."""

from semaphore_client.__version__ import __version__
from semaphore_client.integrations.semaphore import (
    RawResponse,
    SemaphoreAPIError,
    SemaphoreClient,
    SemaphoreConfig,
    SemaphoreConfigError,
    SemaphoreConnectionError,
    SemaphoreError,
    SemaphoreModelError,
    SemaphoreSerializationError,
    SemaphoreValidationError,
)
from semaphore_client.integrations.semaphore.models import Job, JobList, Secret, SecretList
from semaphore_client.services.semaphore import JobManager, ResourceManager, SecretManager

__all__ = [
    "Job",
    "JobList",
    "JobManager",
    "RawResponse",
    "ResourceManager",
    "Secret",
    "SecretList",
    "SecretManager",
    "SemaphoreAPIError",
    "SemaphoreClient",
    "SemaphoreConfig",
    "SemaphoreConfigError",
    "SemaphoreConnectionError",
    "SemaphoreError",
    "SemaphoreModelError",
    "SemaphoreSerializationError",
    "SemaphoreValidationError",
    "__version__",
]
