"""Semaphore API HTTP transport client."""

from __future__ import annotations

import uuid
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
import structlog

from semaphore_client.integrations.semaphore.exceptions import SemaphoreConnectionError

if TYPE_CHECKING:
    from semaphore_client.integrations.semaphore.config import SemaphoreConfig

logger = structlog.get_logger()

QueryParams = Mapping[str, str | Sequence[str]] | Sequence[tuple[str, str]]

REQUEST_ID_HEADER = "X-Semaphore-Req-ID"
USER_ID_HEADER = "X-Semaphore-User-ID"


@dataclass(frozen=True)
class RawResponse:
    """Body and status of a completed HTTP exchange."""

    body: bytes
    status_code: int

    @property
    def text(self) -> str:
        """Body decoded as UTF-8, with undecodable bytes replaced."""
        return self.body.decode("utf-8", errors="replace")


class SemaphoreClient:
    """HTTP transport for the Semaphore API.

    The client builds ``https://{host}/api/{api_version}/{kind}[/{name}]``
    URLs, attaches the fixed header set and returns the raw body and status.
    It has no opinion on which statuses count as success: a 404 comes back
    as a ``RawResponse`` just like a 200. Only failures of the exchange
    itself raise ``SemaphoreConnectionError``.

    Example:
        ```python
        from semaphore_client.integrations.semaphore import (
            SemaphoreClient,
            SemaphoreConfig,
        )

        config = SemaphoreConfig.load()
        with SemaphoreClient(config, api_version="v1beta") as client:
            response = client.list("secrets")
            print(response.status_code, response.text)
        ```
    """

    def __init__(self, config: SemaphoreConfig, api_version: str | None = None) -> None:
        """Initialize Semaphore client.

        Args:
            config: Connection configuration (host, token, timeout).
            api_version: API version overriding ``config.api_version``.
        """
        self.config = config
        self._api_version = api_version or config.api_version
        self._client = httpx.Client(
            timeout=httpx.Timeout(config.timeout),
            verify=config.verify_ssl,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Token {config.token.get_secret_value()}",
            },
        )
        logger.debug(
            "Semaphore client initialized",
            host=config.host,
            api_version=self._api_version,
        )

    def __enter__(self) -> SemaphoreClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: object) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    @property
    def host(self) -> str:
        """Target server hostname."""
        return self.config.host

    @property
    def api_version(self) -> str:
        """API version used in request URLs."""
        return self._api_version

    def set_api_version(self, api_version: str) -> SemaphoreClient:
        """Switch the API version for subsequent requests.

        Args:
            api_version: New API version path segment (e.g. "v1beta").

        Returns:
            The client itself, for chaining.
        """
        self._api_version = api_version
        return self

    def url_for(self, kind: str, name: str | None = None) -> str:
        """Build the URL for a resource collection or a single resource.

        Args:
            kind: Resource path segment (e.g. "secrets").
            name: Optional resource name or id.

        Returns:
            Absolute HTTPS URL.
        """
        url = f"https://{self.host}/api/{self._api_version}/{kind}"
        if name is not None:
            url = f"{url}/{quote(name, safe='')}"
        return url

    def _request_headers(self) -> dict[str, str]:
        return {
            REQUEST_ID_HEADER: str(uuid.uuid4()),
            USER_ID_HEADER: self.config.user_id or str(uuid.uuid4()),
        }

    def _request(
        self,
        method: str,
        url: str,
        *,
        params: QueryParams | None = None,
        content: bytes | None = None,
    ) -> RawResponse:
        """Perform a single HTTP exchange.

        Args:
            method: HTTP method.
            url: Absolute request URL.
            params: Query parameters; repeated keys are kept.
            content: Raw request body.

        Returns:
            Response body and status code.

        Raises:
            SemaphoreConnectionError: On connection, TLS, timeout, protocol or
                content-decoding failure.
        """
        log = logger.bind(method=method, url=url)

        try:
            log.debug("Semaphore API request")
            response = self._client.request(
                method,
                url,
                params=params,
                content=content,
                headers=self._request_headers(),
            )
        except httpx.TimeoutException as e:
            log.error("Semaphore request timeout", error=str(e))
            raise SemaphoreConnectionError(
                f"connecting to Semaphore failed '{e}'",
                details="request timed out",
                original_error=e,
            ) from e
        except httpx.RequestError as e:
            log.error("Semaphore connection error", error=str(e))
            raise SemaphoreConnectionError(
                f"connecting to Semaphore failed '{e}'",
                details=type(e).__name__,
                original_error=e,
            ) from e

        log.debug("Semaphore API response", status=response.status_code)
        return RawResponse(body=response.content, status_code=response.status_code)

    def get(self, kind: str, name: str) -> RawResponse:
        """GET a single resource.

        Args:
            kind: Resource path segment.
            name: Resource name or id.
        """
        return self._request("GET", self.url_for(kind, name))

    def list(self, kind: str) -> RawResponse:
        """GET a resource collection.

        Args:
            kind: Resource path segment.
        """
        return self._request("GET", self.url_for(kind))

    def list_with_params(self, kind: str, params: QueryParams) -> RawResponse:
        """GET a resource collection with query filters.

        Args:
            kind: Resource path segment.
            params: Query parameters. A list value, or a key repeated in a
                sequence of pairs, is sent as a repeated parameter
                (``states=A&states=B``).
        """
        return self._request("GET", self.url_for(kind), params=params)

    def delete(self, kind: str, name: str) -> RawResponse:
        """DELETE a single resource.

        Args:
            kind: Resource path segment.
            name: Resource name or id.
        """
        return self._request("DELETE", self.url_for(kind, name))

    def post(self, kind: str, body: bytes) -> RawResponse:
        """POST a new resource to a collection.

        Args:
            kind: Resource path segment.
            body: Serialized resource.
        """
        return self._request("POST", self.url_for(kind), content=body)

    def patch(self, kind: str, identifier: str, body: bytes) -> RawResponse:
        """PATCH an existing resource.

        Args:
            kind: Resource path segment.
            identifier: Resource id or name.
            body: Serialized resource.
        """
        return self._request("PATCH", self.url_for(kind, identifier), content=body)
