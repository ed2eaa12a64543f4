"""Job manager for the Semaphore API."""

from __future__ import annotations

import builtins
from collections.abc import Iterable
from typing import Any

from semaphore_client.integrations.semaphore.models.job import (
    JOB_API_VERSION,
    Job,
    JobList,
    JobState,
)
from semaphore_client.services.semaphore.base import ResourceManager


class JobManager(ResourceManager[Job, JobList]):
    """Manager for jobs, served under the v1alpha API.

    Example:
        >>> manager = JobManager(SemaphoreConfig.load())
        >>> running = manager.list(states=[JobState.RUNNING, JobState.QUEUED])
    """

    _endpoint = "jobs"
    _api_version = JOB_API_VERSION
    _entity_name = "job"
    _model_class = Job
    _list_class = JobList

    def list(
        self,
        *,
        states: Iterable[JobState | str] | None = None,
        **filters: Any,
    ) -> builtins.list[Job]:
        """List jobs, optionally filtered by state.

        Args:
            states: States to include; each is sent as a separate
                ``states`` query parameter.
            **filters: Additional query parameters.

        Returns:
            Jobs in server order.
        """
        if states is not None:
            filters["states"] = [str(state) for state in states]
        return super().list(**filters)
