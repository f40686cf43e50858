from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import mcp.types as types
import pytest
from mcp.shared.exceptions import McpError

from lifelog_mcp.client.client import LifelogMcpClient, to_tool_result
from lifelog_mcp.client.errors import ClientConnectionError, ClientNotConnectedError, ToolInvocationError


class _FakeSession:
    def __init__(self, state: dict) -> None:
        self._state = state

    async def list_tools(self):
        return types.ListToolsResult(
            tools=[
                types.Tool(
                    name="getLifelogs",
                    description="Retrieve a list of lifelogs.",
                    inputSchema={"type": "object", "properties": {"limit": {"type": "integer"}}},
                )
            ]
        )

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None):
        self._state.setdefault("calls", []).append((name, arguments))
        if name == "explode":
            raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message="bad request"))
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=f"called {name}")],
            isError=name == "failing",
        )


class _FakeMCPTransport:
    def __init__(self, state: dict, fail: bool = False) -> None:
        self._state = state
        self._fail = fail

    def session(self):
        @asynccontextmanager
        async def _cm():
            self._state["opened"] = self._state.get("opened", 0) + 1
            if self._fail:
                raise OSError("spawn failed")
            try:
                yield _FakeSession(self._state)
            finally:
                self._state["closed"] = self._state.get("closed", 0) + 1

        return _cm()


@pytest.mark.asyncio
async def test_list_tools_maps_to_descriptors() -> None:
    state: dict = {}
    async with LifelogMcpClient(_FakeMCPTransport(state)) as client:
        tools = await client.list_tools()

    assert [t.name for t in tools] == ["getLifelogs"]
    assert tools[0].input_schema["properties"]["limit"]["type"] == "integer"


@pytest.mark.asyncio
async def test_call_tool_sends_name_and_arguments() -> None:
    state: dict = {}
    async with LifelogMcpClient(_FakeMCPTransport(state)) as client:
        ok = await client.call_tool("getLifelogs", {"limit": 1})
        failed = await client.call_tool("failing")

    assert state["calls"] == [("getLifelogs", {"limit": 1}), ("failing", {})]
    assert (ok.text, ok.is_error) == ("called getLifelogs", False)
    assert (failed.text, failed.is_error) == ("called failing", True)


@pytest.mark.asyncio
async def test_protocol_error_raises_tool_invocation_error() -> None:
    async with LifelogMcpClient(_FakeMCPTransport({})) as client:
        with pytest.raises(ToolInvocationError) as exc_info:
            await client.call_tool("explode", {})

    assert "bad request" in str(exc_info.value)


@pytest.mark.asyncio
async def test_close_releases_session_once_even_when_called_twice() -> None:
    state: dict = {}
    client = LifelogMcpClient(_FakeMCPTransport(state))
    await client.connect()

    await client.close()
    await client.close()

    assert state == {"opened": 1, "closed": 1}
    assert client.connected is False


@pytest.mark.asyncio
async def test_close_runs_when_a_call_fails() -> None:
    state: dict = {}
    with pytest.raises(ToolInvocationError):
        async with LifelogMcpClient(_FakeMCPTransport(state)) as client:
            await client.call_tool("explode", {})

    assert state["closed"] == 1


@pytest.mark.asyncio
async def test_connect_failure_raises_connection_error() -> None:
    client = LifelogMcpClient(_FakeMCPTransport({}, fail=True))

    with pytest.raises(ClientConnectionError) as exc_info:
        await client.connect()

    assert "spawn failed" in str(exc_info.value)
    assert client.connected is False
    await client.close()


@pytest.mark.asyncio
async def test_calls_without_connect_are_rejected() -> None:
    client = LifelogMcpClient(_FakeMCPTransport({}))

    with pytest.raises(ClientNotConnectedError):
        await client.list_tools()
    with pytest.raises(ClientNotConnectedError):
        await client.call_tool("getLifelogs", {})


def test_to_tool_result_joins_text_content() -> None:
    result = types.CallToolResult(
        content=[
            types.TextContent(type="text", text="a"),
            types.TextContent(type="text", text="b"),
        ],
    )

    converted = to_tool_result(result)

    assert converted.text == "a\nb"
    assert converted.is_error is False
