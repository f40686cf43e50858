"""MCP server for lifelog tools.

``LifelogMcpServer`` bridges a ``ToolRegistry`` onto the low-level server of the
official ``mcp`` package:

- ``tools/list`` answers with the registry's descriptors.
- ``tools/call`` delegates to the registry and maps the ``ToolResult`` onto a
  ``CallToolResult`` with a single text content item and ``isError`` set on
  failure. Tool failures never escape as protocol errors.

The server is transport agnostic: ``serve`` runs over any pair of MCP
read/write streams, ``serve_stdio`` over standard I/O.

Lifecycle
---------
``UNINITIALIZED -> REGISTERED -> SERVING -> TERMINATED``. Tools must be
registered before serving, and a server serves at most once.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional, Type

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from pydantic import BaseModel

from lifelog_mcp import __version__
from lifelog_mcp.core.config import Settings
from lifelog_mcp.core.monitoring import log_tool_call
from lifelog_mcp.lifelogs_api.client import LifelogsApiClient
from lifelog_mcp.schemas.core import ToolDescriptor, ToolResult

from .registry import ToolHandler, ToolRegistry
from .tools import register_lifelog_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "Limitless Lifelog Server"


class ServerState(str, Enum):
    UNINITIALIZED = "uninitialized"
    REGISTERED = "registered"
    SERVING = "serving"
    TERMINATED = "terminated"


class LifelogMcpServer:
    """MCP server exposing the tools of a ``ToolRegistry``."""

    def __init__(self, *, name: str = SERVER_NAME, version: str = __version__, monitored: bool = False) -> None:
        self._registry = ToolRegistry()
        self._state = ServerState.UNINITIALIZED
        self._monitored = monitored
        self._close_callbacks: List[Callable[[], Awaitable[None]]] = []
        self._server: Server = Server(name, version=version)
        self._server.list_tools()(self._handle_list_tools)
        # Registered directly so that failure results keep their exact text.
        self._server.request_handlers[types.CallToolRequest] = self._handle_call_tool

    @property
    def state(self) -> ServerState:
        return self._state

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def register_tool(self, descriptor: ToolDescriptor, handler: ToolHandler, arguments_model: Type[BaseModel]) -> None:
        """Register a tool; only allowed before serving.

        Raises:
            RuntimeError: If the server is already serving or terminated.
            ValueError: If the tool name is already registered.
        """
        if self._state not in (ServerState.UNINITIALIZED, ServerState.REGISTERED):
            raise RuntimeError(f"Cannot register tools while {self._state.value}")
        self._registry.register_tool(descriptor, handler, arguments_model)
        self._state = ServerState.REGISTERED

    def add_close_callback(self, callback: Callable[[], Awaitable[None]]) -> None:
        """Run ``callback`` on ``aclose``, e.g. to release an owned HTTP client."""
        self._close_callbacks.append(callback)

    async def _handle_list_tools(self) -> List[types.Tool]:
        return [
            types.Tool(name=d.name, description=d.description, inputSchema=d.input_schema)
            for d in self._registry.list_tools()
        ]

    async def _handle_call_tool(self, req: types.CallToolRequest) -> types.ServerResult:
        name = req.params.name
        arguments = req.params.arguments or {}
        if self._state is not ServerState.SERVING:
            result = ToolResult.failure(f"Server is not serving (state: {self._state.value})")
        else:
            started = time.perf_counter()
            result = await self._registry.call_tool(name, arguments)
            if self._monitored:
                duration_ms = (time.perf_counter() - started) * 1000
                log_tool_call(name, result.is_error, duration_ms, result.text if result.is_error else None)
        return types.ServerResult(
            types.CallToolResult(
                content=[types.TextContent(type="text", text=result.text)],
                isError=result.is_error,
            )
        )

    async def serve(self, read_stream: Any, write_stream: Any) -> None:
        """Serve MCP requests over the given streams until the transport closes.

        Raises:
            RuntimeError: If no tool is registered or the server already served.
        """
        if self._state is not ServerState.REGISTERED:
            raise RuntimeError(f"Cannot serve while {self._state.value}")
        self._state = ServerState.SERVING
        logger.info("MCP Server serving %d tool(s)", len(self._registry))
        try:
            await self._server.run(read_stream, write_stream, self._server.create_initialization_options())
        finally:
            self._state = ServerState.TERMINATED
            logger.info("MCP Server terminated")

    async def serve_stdio(self) -> None:
        """Serve over standard input/output."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("MCP Server running on stdio")
            await self.serve(read_stream, write_stream)

    async def aclose(self) -> None:
        for callback in self._close_callbacks:
            await callback()
        self._close_callbacks.clear()


def create_server(
    settings: Settings,
    *,
    api_client: Optional[LifelogsApiClient] = None,
    monitored: bool = False,
) -> LifelogMcpServer:
    """Build a server with the lifelog tools registered.

    Args:
        settings: Application settings providing the API key and base URL.
        api_client: Optional preconfigured API client. When omitted, one is
            created from ``settings`` and closed by ``LifelogMcpServer.aclose``.
        monitored: Report every tool call to Logfire.
    """
    server = LifelogMcpServer(monitored=monitored)
    if api_client is None:
        api_client = LifelogsApiClient.from_settings(settings)
        server.add_close_callback(api_client.aclose)
    register_lifelog_tools(server, api_client)
    return server
