"""Lifelog tools exposed over MCP.

A single read-only tool is registered:

- ``getLifelogs``: lists lifelogs via ``GET /v1/lifelogs``. Arguments follow
  ``LifelogQuery``; the result text is the pretty-printed JSON document, or
  ``Error fetching lifelogs: <message>`` with the error flag set.
"""

from __future__ import annotations

import json
import logging

from lifelog_mcp.lifelogs_api.client import LifelogsApiClient
from lifelog_mcp.lifelogs_api.errors import LifelogsApiError
from lifelog_mcp.lifelogs_api.models import LifelogQuery
from lifelog_mcp.schemas.core import ToolDescriptor, ToolResult

from .registry import SupportsToolRegistration

logger = logging.getLogger(__name__)

GET_LIFELOGS_TOOL = "getLifelogs"
GET_LIFELOGS_DESCRIPTION = "Retrieve a list of lifelogs."


def render_document(document: object) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def register_lifelog_tools(target: SupportsToolRegistration, api_client: LifelogsApiClient) -> None:
    """Register ``getLifelogs`` on ``target`` backed by ``api_client``."""

    async def get_lifelogs(query: LifelogQuery) -> ToolResult:
        try:
            document = await api_client.list_lifelogs(query)
        except LifelogsApiError as e:
            logger.warning("getLifelogs failed: %s", e)
            return ToolResult.failure(f"Error fetching lifelogs: {e}")
        return ToolResult.success(render_document(document))

    target.register_tool(
        ToolDescriptor.for_model(GET_LIFELOGS_TOOL, GET_LIFELOGS_DESCRIPTION, LifelogQuery),
        get_lifelogs,
        LifelogQuery,
    )
