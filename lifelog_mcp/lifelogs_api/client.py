"""Limitless API client

Overview
--------
Thin, focused async HTTP client for the Limitless REST API. It is used by the
``getLifelogs`` tool to list lifelogs and deliberately knows nothing about MCP:
it turns query options into a GET request and the HTTP outcome into either a
parsed JSON document or a typed error.

Key features
------------
- Query serialization: every present option becomes a query parameter in its
  plain string form; ``None`` values are omitted and booleans are rendered as
  ``true``/``false``.
- Authentication via a static ``X-API-KEY`` header.
- A single attempt per call; no retries, no caching, no state between calls.

Errors
------
- Non-2xx responses raise ``RequestError`` carrying the status code and body text.
- Network, transport, redirect, decoding and URL failures raise
  ``TransportError`` carrying the cause.
- A 2xx response whose body is not JSON raises ``LifelogsApiError``.

Usage
-----
>>> client = LifelogsApiClient("https://api.limitless.ai", api_key="sk-...")
>>> document = await client.list_lifelogs(LifelogQuery(limit=5))
>>> await client.aclose()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Union

import httpx

from lifelog_mcp.errors import ConfigurationError

from .errors import LifelogsApiError, RequestError, TransportError
from .models import LifelogQuery

if TYPE_CHECKING:
    from lifelog_mcp.core.config import Settings

LIFELOGS_PATH = "/v1/lifelogs"

QueryOptions = Union[LifelogQuery, Mapping[str, Any]]


def serialize_query_params(options: Optional[QueryOptions]) -> Dict[str, str]:
    """Render query options as URL query parameters.

    Args:
        options: A ``LifelogQuery`` or a plain mapping of wire names to values.

    Returns:
        A mapping containing exactly the present (non-``None``) options, each
        rendered as its plain string form.
    """
    if options is None:
        return {}
    if isinstance(options, LifelogQuery):
        options = options.to_query_params()
    params: Dict[str, str] = {}
    for key, value in options.items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = str(value).lower()
        else:
            params[key] = str(value)
    return params


class LifelogsApiClient:
    """Thin async HTTP client for the Limitless API.

    Responsibilities
    ----------------
    - Authenticate requests with the configured API key.
    - Serialize query options and issue GET requests.
    - Normalize responses into JSON documents or ``LifelogsApiError`` subclasses.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Create a Limitless API client.

        Args:
            base_url: Base URL of the API (e.g., ``https://api.limitless.ai``).
            api_key: Value of the ``X-API-KEY`` header. Must not be blank.
            timeout: HTTP timeout in seconds; ``None`` disables client-side timeouts.
            client: Optional preconfigured ``httpx.AsyncClient`` to use.

        Raises:
            ConfigurationError: If ``api_key`` is blank.
        """
        if not api_key or not api_key.strip():
            raise ConfigurationError("LifelogsApiClient requires an API key")
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, settings: "Settings", *, client: Optional[httpx.AsyncClient] = None) -> "LifelogsApiClient":
        return cls(
            settings.api_base_url,
            api_key=settings.api_key,
            timeout=settings.request_timeout,
            client=client,
        )

    def _headers(self) -> Dict[str, str]:
        """Build the API key and JSON content-type headers."""
        return {
            "X-API-KEY": self._api_key,
            "Content-Type": "application/json",
        }

    async def fetch_resource(self, path: str, options: Optional[QueryOptions] = None) -> Any:
        """Issue a GET request and return the parsed JSON body.

        API
        ---
        - Method/Path: ``GET <base_url>/<path>``
        - Headers: ``X-API-KEY``, ``Content-Type: application/json``
        - Query: every present field of ``options``

        Args:
            path: Resource path relative to the base URL (e.g., ``/v1/lifelogs``).
            options: Optional query options.

        Returns:
            The decoded JSON document.

        Raises:
            RequestError: When the response status is non-2xx.
            TransportError: When the request fails before a usable response arrives.
            LifelogsApiError: When a 2xx response body is not valid JSON.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        params = serialize_query_params(options)
        self._logger.debug("LifelogsApiClient.fetch_resource: GET %s params=%s", url, sorted(params))
        try:
            r = await self._client.get(url, headers=self._headers(), params=params or None)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            self._logger.warning("LifelogsApiClient.fetch_resource: request failure for %s: %s", url, e)
            raise TransportError(e) from e
        if not r.is_success:
            self._logger.warning("LifelogsApiClient.fetch_resource: %s returned %s", url, r.status_code)
            raise RequestError(r.status_code, r.text)
        try:
            return r.json()
        except ValueError as e:
            raise LifelogsApiError(
                f"Invalid JSON in response: {r.status_code} {r.text}",
                status_code=r.status_code,
                details=r.text,
            ) from e

    async def list_lifelogs(self, query: Optional[LifelogQuery] = None) -> Any:
        """List lifelogs.

        API
        ---
        - Method/Path: ``GET /v1/lifelogs``
        - Query: see ``LifelogQuery``; defaults apply when ``query`` is omitted.

        Returns:
            The decoded JSON document (``{"data": {"lifelogs": [...]}, "meta": {...}}``
            for the live API).
        """
        return await self.fetch_resource(LIFELOGS_PATH, query or LifelogQuery())

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
