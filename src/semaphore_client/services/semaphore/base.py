"""Base resource manager for Semaphore services.

This module provides an abstract base class implementing the Repository
pattern for Semaphore resources. Each resource kind is a small subclass that
names its endpoint, API version and models; the CRUD verbs, status policy
and error wrapping live here once.
"""

from __future__ import annotations

import builtins
from abc import ABC
from collections.abc import Callable
from typing import Any

import structlog
from pydantic_core import PydanticSerializationError

from semaphore_client.integrations.semaphore.client import QueryParams, RawResponse, SemaphoreClient
from semaphore_client.integrations.semaphore.config import SemaphoreConfig
from semaphore_client.integrations.semaphore.exceptions import (
    SemaphoreAPIError,
    SemaphoreSerializationError,
)
from semaphore_client.integrations.semaphore.models.base import ResourceBase, ResourceListBase

logger = structlog.get_logger()

ClientFactory = Callable[..., SemaphoreClient]


class ResourceManager[T: ResourceBase, L: ResourceListBase](ABC):
    """Abstract base class for Semaphore resource managers.

    Every operation opens a fresh client configured with the resource's API
    version, performs exactly one request and closes the client. Only
    status 200 counts as success.

    Type Parameters:
        T: The Pydantic model class for a single resource.
        L: The Pydantic model class for the list response.

    Class Attributes:
        _endpoint: API path segment (e.g., "secrets", "jobs").
        _api_version: API version serving this resource kind.
        _entity_name: Human-readable resource name for logging.
        _model_class: Model for single-resource responses.
        _list_class: Model for list responses.

    Example:
        >>> class SecretManager(ResourceManager[Secret, SecretList]):
        ...     _endpoint = "secrets"
        ...     _api_version = "v1beta"
        ...     _entity_name = "secret"
        ...     _model_class = Secret
        ...     _list_class = SecretList
    """

    _endpoint: str = ""
    _api_version: str = ""
    _entity_name: str = ""
    _model_class: type[T]
    _list_class: type[L]

    def __init__(
        self,
        config: SemaphoreConfig,
        client_factory: ClientFactory = SemaphoreClient,
    ) -> None:
        """Initialize the resource manager.

        Args:
            config: Connection configuration used for every request.
            client_factory: Callable building a client from
                ``(config, api_version=...)``.
        """
        self._config = config
        self._client_factory = client_factory
        self._log = logger.bind(entity=self._entity_name)

    @property
    def endpoint(self) -> str:
        """Return the API path segment for this resource kind."""
        return self._endpoint

    @property
    def api_version(self) -> str:
        """Return the API version serving this resource kind."""
        return self._api_version

    def _open_client(self) -> SemaphoreClient:
        return self._client_factory(self._config, api_version=self._api_version)

    def _check_status(self, response: RawResponse, endpoint: str) -> None:
        """Raise unless upstream answered with exactly 200.

        Raises:
            SemaphoreAPIError: With the status code and raw body.
        """
        if response.status_code != 200:
            self._log.warning(
                "upstream_error",
                endpoint=endpoint,
                status=response.status_code,
            )
            raise SemaphoreAPIError(
                response.status_code,
                response.text,
                endpoint=endpoint,
            )

    def _serialize(self, entity: T) -> bytes:
        try:
            return entity.to_json()
        except PydanticSerializationError as e:
            raise SemaphoreSerializationError(
                f"failed to serialize {self._entity_name} object '{e}'",
            ) from e

    @staticmethod
    def _build_query(params: dict[str, Any]) -> builtins.list[tuple[str, str]]:
        """Flatten keyword filters into query pairs.

        ``None`` values are dropped and list values become repeated keys.
        """
        query: builtins.list[tuple[str, str]] = []
        for key, value in params.items():
            if value is None:
                continue
            if isinstance(value, list | tuple | set | frozenset):
                query.extend((key, str(item)) for item in value)
            else:
                query.append((key, str(value)))
        return query

    def list(self, **filters: Any) -> builtins.list[T]:
        """List resources, optionally filtered.

        Args:
            **filters: Query parameters. List values are sent as repeated
                parameters (``states=A&states=B``).

        Returns:
            Resources in server order.

        Raises:
            SemaphoreConnectionError: If the request could not be made.
            SemaphoreAPIError: If upstream did not answer 200.
            SemaphoreSerializationError: If the body is not a valid list.
        """
        query: QueryParams = self._build_query(filters)

        self._log.debug("listing_entities", filters=query)
        with self._open_client() as client:
            if query:
                response = client.list_with_params(self._endpoint, query)
            else:
                response = client.list(self._endpoint)

        self._check_status(response, self._endpoint)
        entities = self._list_class.from_json(response.body).items
        self._log.debug("listed_entities", count=len(entities))
        return entities

    def get(self, name: str) -> T:
        """Get a single resource by name or id.

        Args:
            name: Resource name or id.

        Returns:
            The resource.

        Raises:
            SemaphoreConnectionError: If the request could not be made.
            SemaphoreAPIError: If upstream did not answer 200.
            SemaphoreSerializationError: If the body is not a valid resource.
        """
        self._log.debug("getting_entity", name=name)
        with self._open_client() as client:
            response = client.get(self._endpoint, name)

        self._check_status(response, f"{self._endpoint}/{name}")
        entity = self._model_class.from_json(response.body)
        self._log.debug("got_entity", object=entity.object_name)
        return entity

    def create(self, entity: T) -> T:
        """Create a new resource.

        The entity is validated and serialized before any request is made.

        Args:
            entity: Resource to create.

        Returns:
            The resource as stored by the server.

        Raises:
            SemaphoreValidationError: If the entity has a blank name.
            SemaphoreConnectionError: If the request could not be made.
            SemaphoreAPIError: If upstream did not answer 200.
            SemaphoreSerializationError: If (de)serialization fails.
        """
        entity.validate_resource()
        body = self._serialize(entity)

        self._log.info("creating_entity", object=entity.object_name)
        with self._open_client() as client:
            response = client.post(self._endpoint, body)

        self._check_status(response, self._endpoint)
        created = self._model_class.from_json(response.body)
        self._log.info("created_entity", object=created.object_name, id=created.metadata.id)
        return created

    def update(self, entity: T) -> T:
        """Update an existing resource.

        The request is addressed by ``metadata.id`` when set, otherwise by
        ``metadata.name``.

        Args:
            entity: Resource with the desired state.

        Returns:
            The resource as stored by the server.

        Raises:
            SemaphoreValidationError: If the entity has a blank name.
            SemaphoreConnectionError: If the request could not be made.
            SemaphoreAPIError: If upstream did not answer 200.
            SemaphoreSerializationError: If (de)serialization fails.
        """
        entity.validate_resource()
        body = self._serialize(entity)
        identifier = entity.identifier

        self._log.info("updating_entity", object=entity.object_name, identifier=identifier)
        with self._open_client() as client:
            response = client.patch(self._endpoint, identifier, body)

        self._check_status(response, f"{self._endpoint}/{identifier}")
        updated = self._model_class.from_json(response.body)
        self._log.info("updated_entity", object=updated.object_name)
        return updated

    def delete(self, name: str) -> None:
        """Delete a resource by name.

        Args:
            name: Resource name or id.

        Raises:
            SemaphoreConnectionError: If the request could not be made.
            SemaphoreAPIError: If upstream did not answer 200.
        """
        self._log.info("deleting_entity", name=name)
        with self._open_client() as client:
            response = client.delete(self._endpoint, name)

        self._check_status(response, f"{self._endpoint}/{name}")
        self._log.info("deleted_entity", name=name)

    def exists(self, name: str) -> bool:
        """Check if a resource exists.

        Args:
            name: Resource name or id.

        Returns:
            True if upstream returns the resource, False on 404.
        """
        try:
            self.get(name)
        except SemaphoreAPIError as e:
            if e.status_code == 404:
                return False
            raise
        return True
