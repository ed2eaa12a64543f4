"""Job resource models.

Only ``metadata.name`` is validated; the rest of the job payload is carried
as-is and unknown JSON fields are ignored.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar

from pydantic import Field

from semaphore_client.integrations.semaphore.models.base import (
    EnvVar,
    File,
    ResourceBase,
    ResourceListBase,
    ResourceMetadata,
    SemaphoreModel,
    Timestamp,
    WireStr,
)

JOB_API_VERSION = "v1alpha"
JOB_KIND = "Job"


class JobState(StrEnum):
    """Job states accepted by the ``states`` list filter."""

    PENDING = "PENDING"
    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    FINISHED = "FINISHED"


class JobMetadata(ResourceMetadata):
    """Job metadata, adding execution timestamps."""

    start_time: Timestamp | None = None
    finish_time: Timestamp | None = None


class Machine(SemaphoreModel):
    """Agent machine selection."""

    type: WireStr = ""
    os_image: WireStr = ""


class JobAgent(SemaphoreModel):
    """Agent the job requests."""

    machine: Machine = Field(default_factory=Machine)


class JobSpec(SemaphoreModel):
    """What the job runs."""

    project_id: WireStr = ""
    agent: JobAgent = Field(default_factory=JobAgent)
    env_vars: list[EnvVar] = Field(default_factory=list)
    files: list[File] = Field(default_factory=list)
    commands: list[WireStr] = Field(default_factory=list)


class AgentPort(SemaphoreModel):
    """Port exposed by the agent running a job."""

    name: WireStr = ""
    number: int = 0


class AgentStatus(SemaphoreModel):
    """Agent the job landed on."""

    ip: WireStr = ""
    ports: list[AgentPort] = Field(default_factory=list)


class JobStatus(SemaphoreModel):
    """Job progress as reported by the server."""

    state: WireStr = ""
    result: WireStr = ""
    agent: AgentStatus = Field(default_factory=AgentStatus)


class Job(ResourceBase):
    """Semaphore job."""

    metadata: JobMetadata = Field(default_factory=JobMetadata)
    spec: JobSpec = Field(default_factory=JobSpec)
    status: JobStatus = Field(default_factory=JobStatus)

    _entity_name: ClassVar[str] = "job"
    _default_api_version: ClassVar[str] = JOB_API_VERSION
    _default_kind: ClassVar[str] = JOB_KIND

    @property
    def is_finished(self) -> bool:
        """Whether the job reached a terminal state."""
        return self.status.state == JobState.FINISHED


class JobList(ResourceListBase):
    """Response for listing jobs."""

    jobs: list[Job] = Field(default_factory=list)

    _entity_name: ClassVar[str] = "job list"

    @property
    def items(self) -> list[Job]:
        """Jobs in the collection."""
        return self.jobs
