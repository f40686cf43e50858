"""Lifelog MCP.

This package exposes the Limitless "list lifelogs" REST endpoint as a tool over
the Model Context Protocol (MCP), and ships a small client able to call it.

High-level architecture
-----------------------

- ``lifelog_mcp.lifelogs_api``: thin ``httpx`` client for the remote API. It
  serializes query options, attaches the ``X-API-KEY`` header and normalizes
  HTTP outcomes into JSON documents or typed errors.
- ``lifelog_mcp.server``: a tool registry holding the ``getLifelogs`` tool and
  the MCP server bridging that registry onto a transport.
- ``lifelog_mcp.client``: pluggable transports (spawned stdio subprocess,
  in-memory, streamable HTTP, SSE) and the client facade used by the CLI.
- ``lifelog_mcp.core``: configuration (``pydantic-settings``), logging and
  optional Logfire monitoring.

Typical workflow
----------------

1. ``python -m lifelog_mcp server`` serves the tool over standard I/O.
2. ``python -m lifelog_mcp client`` spawns a server, calls ``getLifelogs`` once
   and prints the result.
3. ``python -m lifelog_mcp interactive`` spawns a server and prompts for tool
   calls until ``quit``.
"""

__version__ = "1.0.0"
