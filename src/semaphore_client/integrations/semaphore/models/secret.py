"""Secret resource models."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from semaphore_client.integrations.semaphore.models.base import (
    EnvVar,
    File,
    ResourceBase,
    ResourceListBase,
    SemaphoreModel,
)

SECRET_API_VERSION = "v1beta"
SECRET_KIND = "Secret"


class SecretData(SemaphoreModel):
    """Secret payload: environment variables and files, both ordered."""

    env_vars: list[EnvVar] = Field(default_factory=list)
    files: list[File] = Field(default_factory=list)


class Secret(ResourceBase):
    """Semaphore secret.

    Example:
        >>> secret = Secret.from_name("db-password")
        >>> secret.data.env_vars.append(EnvVar(name="DB_PASSWORD", value="hunter2"))
        >>> secret.api_version, secret.kind
        ('v1beta', 'Secret')
    """

    data: SecretData = Field(default_factory=SecretData)

    _entity_name: ClassVar[str] = "secret"
    _default_api_version: ClassVar[str] = SECRET_API_VERSION
    _default_kind: ClassVar[str] = SECRET_KIND


class SecretList(ResourceListBase):
    """Response for listing secrets."""

    secrets: list[Secret] = Field(default_factory=list)

    _entity_name: ClassVar[str] = "secret list"

    @property
    def items(self) -> list[Secret]:
        """Secrets in the collection."""
        return self.secrets
