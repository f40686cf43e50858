from __future__ import annotations

import asyncio
import os
import sys
from contextlib import asynccontextmanager, suppress
from typing import TYPE_CHECKING, AsyncContextManager, AsyncIterator, Dict, Optional, Protocol, Sequence

from mcp import ClientSession, StdioServerParameters
from mcp.client.sse import sse_client
from mcp.client.stdio import stdio_client
from mcp.client.streamable_http import streamablehttp_client
from mcp.shared.memory import create_client_server_memory_streams

from lifelog_mcp.core.config import API_BASE_ENV_VAR, API_KEY_ENV_VAR, Settings

if TYPE_CHECKING:
    from lifelog_mcp.server.server import LifelogMcpServer


class MCPTransport(Protocol):
    """Protocol for creating MCP ClientSession connections asynchronously.

    Implementations return an async context manager via ``session()`` that
    yields an initialized ``ClientSession`` and releases every resource it
    acquired (streams, subprocesses, in-process server tasks) on exit.
    """

    def session(self) -> AsyncContextManager[ClientSession]:
        """
        Establish a session with the server this transport points at.

        Returns:
            AsyncContextManager[ClientSession]: An async context manager yielding a connected session.
        """
        ...


class StdioMCPTransport(MCPTransport):
    """MCP transport spawning the server as a subprocess and talking over its stdio.

    The subprocess is terminated when the session context exits.
    """

    def __init__(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        env: Optional[Dict[str, str]] = None,
        cwd: Optional[str] = None,
    ) -> None:
        self.command = command
        self.args = list(args)
        self.env = env
        self.cwd = cwd

    def session(self) -> AsyncContextManager[ClientSession]:
        """
        Spawn the server and create a session over its standard I/O.

        Returns:
            AsyncContextManager[ClientSession]: An initialized session over stdio.
        """
        params = StdioServerParameters(command=self.command, args=self.args, env=self.env, cwd=self.cwd)

        @asynccontextmanager
        async def _cm() -> AsyncIterator[ClientSession]:
            async with stdio_client(params) as (read_stream, write_stream):
                async with ClientSession(read_stream, write_stream) as session:
                    await session.initialize()
                    yield session

        return _cm()


class InMemoryMCPTransport(MCPTransport):
    """MCP transport running a ``LifelogMcpServer`` in-process over memory streams."""

    def __init__(self, server: "LifelogMcpServer") -> None:
        self._server = server

    def session(self) -> AsyncContextManager[ClientSession]:
        """
        Serve ``server`` in a background task and create a session against it.

        Returns:
            AsyncContextManager[ClientSession]: An initialized in-process session.
        """

        @asynccontextmanager
        async def _cm() -> AsyncIterator[ClientSession]:
            async with create_client_server_memory_streams() as (client_streams, server_streams):
                client_read, client_write = client_streams
                server_read, server_write = server_streams
                serve_task = asyncio.create_task(self._server.serve(server_read, server_write))
                try:
                    async with ClientSession(client_read, client_write) as session:
                        await session.initialize()
                        yield session
                finally:
                    serve_task.cancel()
                    with suppress(asyncio.CancelledError):
                        await serve_task

        return _cm()


class StreamableHttpMCPTransport(MCPTransport):
    """MCP transport attaching to a running server over streamable HTTP."""

    def __init__(self, endpoint_url: str, *, headers: Optional[Dict[str, str]] = None) -> None:
        self.endpoint_url = endpoint_url
        self.headers = headers

    def session(self) -> AsyncContextManager[ClientSession]:
        """
        Create a session over Streamable HTTP.

        Returns:
            AsyncContextManager[ClientSession]: An initialized session over HTTP.
        """

        @asynccontextmanager
        async def _cm() -> AsyncIterator[ClientSession]:
            async with streamablehttp_client(self.endpoint_url, headers=self.headers) as (
                read_stream,
                write_stream,
                _close_fn,
            ):
                async with ClientSession(read_stream, write_stream) as session:
                    await session.initialize()
                    yield session

        return _cm()


class SseMCPTransport(MCPTransport):
    """MCP transport attaching to a running server over SSE."""

    def __init__(self, endpoint_url: str, *, headers: Optional[Dict[str, str]] = None) -> None:
        self.endpoint_url = endpoint_url
        self.headers = headers

    def session(self) -> AsyncContextManager[ClientSession]:
        """
        Create a session over Server-Sent Events (SSE).

        Returns:
            AsyncContextManager[ClientSession]: An initialized session over SSE.
        """

        @asynccontextmanager
        async def _cm() -> AsyncIterator[ClientSession]:
            async with sse_client(self.endpoint_url, headers=self.headers) as (read_stream, write_stream):
                async with ClientSession(read_stream, write_stream) as session:
                    await session.initialize()
                    yield session

        return _cm()


def spawn_server_transport(settings: Settings, *, python: Optional[str] = None) -> StdioMCPTransport:
    """Transport spawning ``python -m lifelog_mcp server`` with the API settings propagated.

    The child inherits the current environment so that the interpreter finds
    its packages, plus the API key and base URL from ``settings``.
    """
    env = dict(os.environ)
    env[API_KEY_ENV_VAR] = settings.api_key
    env[API_BASE_ENV_VAR] = settings.api_base_url
    return StdioMCPTransport(python or sys.executable, ["-m", "lifelog_mcp", "server"], env=env)
