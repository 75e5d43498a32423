"""Elasticsearch search client for elkalert."""

import logging
from typing import Any, Optional

import httpx

from elkalert import __version__
from elkalert.config import AlertConfig
from elkalert.errors import BackendQueryError, MalformedResponseError

logger = logging.getLogger(__name__)


class SearchClient:
    """HTTP client for the Elasticsearch _search endpoint."""

    def __init__(
        self,
        host: str,
        username: str = "",
        password: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None
    ):
        self.host = host.rstrip("/")
        self.username = username
        self.password = password
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @classmethod
    def from_config(
        cls,
        config: AlertConfig,
        transport: Optional[httpx.BaseTransport] = None
    ) -> "SearchClient":
        return cls(
            config.elk_host,
            config.elk_username,
            config.elk_password,
            timeout=config.request_timeout,
            transport=transport,
        )

    @property
    def client(self) -> httpx.Client:
        """Get HTTP client (lazy init)."""
        if self._client is None:
            auth = (self.username, self.password) if self.username else None
            self._client = httpx.Client(
                timeout=self.timeout,
                auth=auth,
                transport=self._transport,
            )
        return self._client

    def search(self, index: str, body: str) -> dict[str, Any]:
        """Run a search request.

        Args:
            index: Index name or pattern
            body: Query body, sent unmodified

        Returns:
            Decoded JSON response

        Raises:
            BackendQueryError: Request failed or was rejected
            MalformedResponseError: Response is not a JSON object
        """
        url = f"{self.host}/{index}/_search"

        try:
            response = self.client.post(
                url,
                content=body.encode("utf-8"),
                headers={
                    "Content-Type": "application/json",
                    "User-Agent": f"elkalert/{__version__}",
                }
            )
        except httpx.RequestError as e:
            raise BackendQueryError(f"Error performing search on {url}: {e}") from e

        if response.is_error:
            raise BackendQueryError(
                f"Elasticsearch error response: HTTP {response.status_code} {response.text[:500]}",
                status_code=response.status_code
            )

        try:
            result = response.json()
        except ValueError as e:
            raise MalformedResponseError("<root>", f"invalid JSON: {e}") from e

        if not isinstance(result, dict):
            raise MalformedResponseError("<root>", f"expected object, got {type(result).__name__}")

        logger.debug(f"Search on {index} took {result.get('took', '?')} ms")
        return result

    def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "SearchClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
