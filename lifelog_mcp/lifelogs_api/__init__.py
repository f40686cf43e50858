"""Limitless API client and models.

Exposes a thin async HTTP client for the Limitless REST API, the query model
for the lifelogs endpoint and the error types raised by the client.
"""

from .client import LifelogsApiClient, serialize_query_params
from .errors import LifelogsApiError, RequestError, TransportError
from .models import LifelogQuery

__all__ = [
    "LifelogsApiClient",
    "LifelogQuery",
    "LifelogsApiError",
    "RequestError",
    "TransportError",
    "serialize_query_params",
]
