"""Semaphore resource models."""

from semaphore_client.integrations.semaphore.models.base import (
    EnvVar,
    File,
    ResourceBase,
    ResourceListBase,
    ResourceMetadata,
    SemaphoreModel,
)
from semaphore_client.integrations.semaphore.models.job import (
    Job,
    JobList,
    JobMetadata,
    JobSpec,
    JobState,
    JobStatus,
)
from semaphore_client.integrations.semaphore.models.secret import (
    Secret,
    SecretData,
    SecretList,
)

__all__ = [
    "EnvVar",
    "File",
    "Job",
    "JobList",
    "JobMetadata",
    "JobSpec",
    "JobState",
    "JobStatus",
    "ResourceBase",
    "ResourceListBase",
    "ResourceMetadata",
    "Secret",
    "SecretData",
    "SecretList",
    "SemaphoreModel",
]
