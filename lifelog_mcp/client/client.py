"""MCP client facade.

``LifelogMcpClient`` owns one transport session at a time:

- ``connect`` opens and initializes the session through an ``MCPTransport``;
- ``list_tools`` and ``call_tool`` issue requests and block until answered;
- ``close`` releases the session and any spawned server subprocess. It is
  idempotent, and the async context manager form guarantees it runs.

Calls on one session must be serialized by the caller; the client does not
queue or lock.

Usage:
    async with LifelogMcpClient(spawn_server_transport(settings)) as client:
        tools = await client.list_tools()
        result = await client.call_tool("getLifelogs", {"limit": 5})
"""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack
from typing import Any, List, Mapping, Optional

from mcp import ClientSession
from mcp.shared.exceptions import McpError

from lifelog_mcp.schemas.core import ToolDescriptor, ToolResult

from .errors import ClientConnectionError, ClientNotConnectedError, ToolInvocationError
from .transport import MCPTransport

logger = logging.getLogger(__name__)


def to_tool_result(result: Any) -> ToolResult:
    """Convert an MCP ``CallToolResult`` into a ``ToolResult``.

    Text content items are joined with newlines; other content types are
    rendered as JSON.
    """
    texts: List[str] = []
    for item in getattr(result, "content", None) or []:
        if getattr(item, "type", None) == "text":
            texts.append(str(getattr(item, "text", "")))
        elif hasattr(item, "model_dump_json"):
            texts.append(item.model_dump_json())
        else:
            texts.append(str(item))
    text = "\n".join(texts)
    if getattr(result, "isError", False):
        return ToolResult.failure(text)
    return ToolResult.success(text)


class LifelogMcpClient:
    """Client for a single MCP server reached through a pluggable transport."""

    def __init__(self, transport: MCPTransport) -> None:
        self._transport = transport
        self._exit_stack: Optional[AsyncExitStack] = None
        self._session: Optional[ClientSession] = None

    @property
    def connected(self) -> bool:
        return self._session is not None

    async def __aenter__(self) -> "LifelogMcpClient":
        return await self.connect()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def connect(self) -> "LifelogMcpClient":
        """Open and initialize the transport session.

        Returns:
            This client, connected.

        Raises:
            ClientConnectionError: If the session cannot be established. Any
                partially acquired resources are released first.
        """
        if self._session is not None:
            return self
        stack = AsyncExitStack()
        try:
            self._session = await stack.enter_async_context(self._transport.session())
        except Exception as e:
            await stack.aclose()
            raise ClientConnectionError(str(e) or type(e).__name__) from e
        self._exit_stack = stack
        logger.debug("LifelogMcpClient.connect: connected via %s", type(self._transport).__name__)
        return self

    def _require_session(self) -> ClientSession:
        if self._session is None:
            raise ClientNotConnectedError()
        return self._session

    async def list_tools(self) -> List[ToolDescriptor]:
        """Return the tools advertised by the server."""
        session = self._require_session()
        resp = await session.list_tools()
        tools: List[ToolDescriptor] = []
        for tool in getattr(resp, "tools", []) or []:
            input_schema = getattr(tool, "inputSchema", None) or {}
            tools.append(
                ToolDescriptor(
                    name=tool.name,
                    description=getattr(tool, "description", None) or "",
                    input_schema=input_schema if isinstance(input_schema, dict) else {},
                )
            )
        return tools

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        """Call a tool by name.

        Tool names are not checked locally; unknown tools are rejected by the
        server with a failure result.

        Returns:
            The ``ToolResult``; failures reported by the tool have ``is_error`` set.

        Raises:
            ClientNotConnectedError: If ``connect`` has not been called.
            ToolInvocationError: If the server rejects the request at the protocol level.
        """
        session = self._require_session()
        logger.debug("LifelogMcpClient.call_tool: %s args_keys=%s", name, list((arguments or {}).keys()))
        try:
            res = await session.call_tool(name, dict(arguments or {}))
        except McpError as e:
            raise ToolInvocationError(name, str(e)) from e
        return to_tool_result(res)

    async def close(self) -> None:
        """Release the session and any spawned subprocess. Safe to call repeatedly."""
        stack, self._exit_stack = self._exit_stack, None
        self._session = None
        if stack is None:
            return
        await stack.aclose()
        logger.debug("LifelogMcpClient.close: session released")
