"""MCP client for lifelog tools.

Key modules
-----------

- ``transport``: ``MCPTransport`` implementations (spawned stdio subprocess,
  in-memory, streamable HTTP, SSE).
- ``client``: ``LifelogMcpClient`` with connect / list_tools / call_tool / close.
- ``runner``: one-shot and interactive console front-ends.
- ``errors``: client exception hierarchy.
"""

from .client import LifelogMcpClient
from .errors import (
    ClientConnectionError,
    ClientNotConnectedError,
    McpClientError,
    ToolInvocationError,
)
from .transport import (
    InMemoryMCPTransport,
    MCPTransport,
    SseMCPTransport,
    StdioMCPTransport,
    StreamableHttpMCPTransport,
    spawn_server_transport,
)

__all__ = [
    "ClientConnectionError",
    "ClientNotConnectedError",
    "InMemoryMCPTransport",
    "LifelogMcpClient",
    "MCPTransport",
    "McpClientError",
    "SseMCPTransport",
    "StdioMCPTransport",
    "StreamableHttpMCPTransport",
    "ToolInvocationError",
    "spawn_server_transport",
]
