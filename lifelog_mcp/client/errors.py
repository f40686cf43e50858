"""Error types for the MCP client package.

Defines a small hierarchy of exceptions raised by ``LifelogMcpClient`` to
signal lifecycle misuse, connection failures, and protocol-level tool
invocation failures. Tool failures reported by the server are not errors:
they arrive as ``ToolResult`` values with ``is_error`` set.
"""

from __future__ import annotations


class McpClientError(Exception):
    """Base error for all MCP client exceptions."""


class ClientNotConnectedError(McpClientError):
    """Raised when an operation requires a connected session."""

    def __init__(self) -> None:
        super().__init__("MCP client is not connected")


class ClientConnectionError(McpClientError):
    """Raised when the transport session cannot be established."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to connect to MCP server: {message}")


class ToolInvocationError(McpClientError):
    """Raised when a tool call fails at the protocol or transport level."""

    def __init__(self, tool_name: str, message: str) -> None:
        super().__init__(f"Tool invocation failed for '{tool_name}': {message}")
