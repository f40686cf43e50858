"""Tool registry and MCP server.

Key modules
-----------

- ``registry``: ``ToolRegistry`` holding tools with validated dispatch.
- ``tools``: the ``getLifelogs`` tool backed by ``LifelogsApiClient``.
- ``server``: ``LifelogMcpServer`` bridging the registry onto an MCP transport
  and the ``create_server`` factory.
"""

from .registry import ToolRegistry
from .server import LifelogMcpServer, ServerState, create_server
from .tools import GET_LIFELOGS_TOOL

__all__ = [
    "GET_LIFELOGS_TOOL",
    "LifelogMcpServer",
    "ServerState",
    "ToolRegistry",
    "create_server",
]
