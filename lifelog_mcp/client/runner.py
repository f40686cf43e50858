"""Console front-ends for ``LifelogMcpClient``.

- ``run_once``: connect, show the available tools, call ``getLifelogs`` with
  no arguments, print the result and close.
- ``run_interactive``: prompt for a tool name and JSON arguments until
  ``quit`` (or end of input), printing every result.

Both always close the client, even when a call fails.
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, Callable, Dict, Optional

from lifelog_mcp.errors import InputError
from lifelog_mcp.schemas.core import ToolResult
from lifelog_mcp.server.tools import GET_LIFELOGS_TOOL

from .client import LifelogMcpClient
from .errors import McpClientError

QUIT_COMMAND = "quit"
TOOL_PROMPT = f"Enter tool name (or '{QUIT_COMMAND}'): "
ARGUMENTS_PROMPT = "Enter JSON parameters (or {}): "

Printer = Callable[[str], None]


def _print_out(message: str) -> None:
    print(message, flush=True)


def _print_err(message: str) -> None:
    print(message, file=sys.stderr, flush=True)


def parse_arguments(raw: str) -> Dict[str, Any]:
    """Parse interactive input into a tool arguments object.

    Blank input means no arguments.

    Raises:
        InputError: If the input is not JSON or not a JSON object.
    """
    raw = raw.strip()
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON: {e.msg}") from e
    if not isinstance(value, dict):
        raise InputError("Arguments must be a JSON object")
    return value


def render_result(result: ToolResult) -> str:
    return json.dumps(result.to_wire(), indent=2, ensure_ascii=False)


async def _announce_tools(client: LifelogMcpClient, echo: Printer) -> None:
    tools = await client.list_tools()
    echo(f"Connected. Available tools: {[t.name for t in tools]}")


async def run_once(client: LifelogMcpClient, *, echo: Printer = _print_out, report: Printer = _print_err) -> Optional[ToolResult]:
    """Call ``getLifelogs`` once with no arguments and print the result.

    Returns:
        The result, or ``None`` when the call failed at the protocol level.

    Raises:
        ClientConnectionError: If connecting fails.
    """
    async with client:
        await _announce_tools(client, echo)
        try:
            result = await client.call_tool(GET_LIFELOGS_TOOL, {})
        except McpClientError as e:
            report(f"Error: {e}")
            return None
        echo(f"Response from {GET_LIFELOGS_TOOL}: {render_result(result)}")
        return result


async def run_interactive(
    client: LifelogMcpClient,
    *,
    prompt: Callable[[str], str] = input,
    echo: Printer = _print_out,
    report: Printer = _print_err,
) -> int:
    """Prompt for tool calls until ``quit``.

    Args:
        client: Client to connect and call through; closed on return.
        prompt: Blocking line reader; run in a worker thread.
        echo: Output for results.
        report: Output for errors.

    Returns:
        The number of tool calls issued.

    Raises:
        ClientConnectionError: If connecting fails.
    """
    calls = 0
    async with client:
        await _announce_tools(client, echo)
        while True:
            try:
                tool_name = (await asyncio.to_thread(prompt, TOOL_PROMPT)).strip()
            except EOFError:
                break
            if tool_name.lower() == QUIT_COMMAND:
                break
            try:
                raw_arguments = await asyncio.to_thread(prompt, ARGUMENTS_PROMPT)
            except EOFError:
                break
            try:
                arguments = parse_arguments(raw_arguments)
            except InputError as e:
                report(f"{e}. Try again.")
                continue
            calls += 1
            try:
                result = await client.call_tool(tool_name, arguments)
            except McpClientError as e:
                report(f"Error: {e}")
                continue
            echo(f"Response: {render_result(result)}")
    return calls
