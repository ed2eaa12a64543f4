"""Semaphore resource managers."""

from semaphore_client.services.semaphore.base import ResourceManager
from semaphore_client.services.semaphore.job_manager import JobManager
from semaphore_client.services.semaphore.secret_manager import SecretManager

__all__ = [
    "JobManager",
    "ResourceManager",
    "SecretManager",
]
