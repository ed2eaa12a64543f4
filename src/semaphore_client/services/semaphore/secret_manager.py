"""Secret manager for the Semaphore API."""

from __future__ import annotations

from semaphore_client.integrations.semaphore.models.secret import (
    SECRET_API_VERSION,
    Secret,
    SecretList,
)
from semaphore_client.services.semaphore.base import ResourceManager


class SecretManager(ResourceManager[Secret, SecretList]):
    """Manager for secrets, served under the v1beta API."""

    _endpoint = "secrets"
    _api_version = SECRET_API_VERSION
    _entity_name = "secret"
    _model_class = Secret
    _list_class = SecretList
