from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pytest

from lifelog_mcp.client.errors import ToolInvocationError
from lifelog_mcp.client.runner import parse_arguments, run_interactive, run_once
from lifelog_mcp.errors import InputError
from lifelog_mcp.schemas.core import ToolDescriptor, ToolResult


class _FakeClient:
    def __init__(self, *, raise_on: Optional[str] = None) -> None:
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.entered = 0
        self.exited = 0
        self._raise_on = raise_on

    async def __aenter__(self) -> "_FakeClient":
        self.entered += 1
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.exited += 1

    async def list_tools(self) -> List[ToolDescriptor]:
        return [ToolDescriptor(name="getLifelogs", description="Retrieve a list of lifelogs.")]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        self.calls.append((name, dict(arguments or {})))
        if name == self._raise_on:
            raise ToolInvocationError(name, "protocol failure")
        if name != "getLifelogs":
            return ToolResult.failure(f"Unknown tool: {name}")
        return ToolResult.success('{"lifelogs": []}')


def _prompt(lines: Iterable[str]):
    remaining = list(lines)
    prompts: List[str] = []

    def prompt(message: str) -> str:
        prompts.append(message)
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    prompt.prompts = prompts  # type: ignore[attr-defined]
    return prompt


def test_parse_arguments() -> None:
    assert parse_arguments("") == {}
    assert parse_arguments("  {} ") == {}
    assert parse_arguments('{"limit": 2}') == {"limit": 2}
    with pytest.raises(InputError):
        parse_arguments("not-json")
    with pytest.raises(InputError):
        parse_arguments("[1, 2]")


@pytest.mark.asyncio
async def test_run_once_calls_get_lifelogs_with_no_arguments() -> None:
    client = _FakeClient()
    out: List[str] = []

    result = await run_once(client, echo=out.append, report=out.append)  # type: ignore[arg-type]

    assert result == ToolResult.success('{"lifelogs": []}')
    assert client.calls == [("getLifelogs", {})]
    assert out[0] == "Connected. Available tools: ['getLifelogs']"
    assert out[1].startswith("Response from getLifelogs: ")
    assert json.loads(out[1].split(": ", 1)[1]) == {"text": '{"lifelogs": []}', "isError": False}
    assert client.exited == 1


@pytest.mark.asyncio
async def test_run_once_reports_protocol_errors_and_still_closes() -> None:
    client = _FakeClient(raise_on="getLifelogs")
    out: List[str] = []
    err: List[str] = []

    result = await run_once(client, echo=out.append, report=err.append)  # type: ignore[arg-type]

    assert result is None
    assert err and err[0].startswith("Error: ")
    assert client.exited == 1


@pytest.mark.asyncio
async def test_interactive_invalid_json_skips_call_and_prompts_again() -> None:
    client = _FakeClient()
    prompt = _prompt(["getLifelogs", "not-json", "quit"])
    out: List[str] = []
    err: List[str] = []

    calls = await run_interactive(client, prompt=prompt, echo=out.append, report=err.append)  # type: ignore[arg-type]

    assert calls == 0
    assert client.calls == []
    assert len(err) == 1 and "Invalid JSON" in err[0]
    assert prompt.prompts[-1].startswith("Enter tool name")  # type: ignore[attr-defined]
    assert client.exited == 1


@pytest.mark.asyncio
async def test_interactive_sends_unknown_tools_to_server_and_continues() -> None:
    client = _FakeClient()
    prompt = _prompt(["mystery", "{}", "getLifelogs", '{"limit": 1}', "QUIT"])
    out: List[str] = []

    calls = await run_interactive(client, prompt=prompt, echo=out.append, report=out.append)  # type: ignore[arg-type]

    assert calls == 2
    assert client.calls == [("mystery", {}), ("getLifelogs", {"limit": 1})]
    responses = [line for line in out if line.startswith("Response: ")]
    assert json.loads(responses[0][len("Response: "):])["isError"] is True
    assert json.loads(responses[1][len("Response: "):])["isError"] is False


@pytest.mark.asyncio
async def test_interactive_stops_at_end_of_input() -> None:
    client = _FakeClient()

    calls = await run_interactive(client, prompt=_prompt([]), echo=lambda _: None, report=lambda _: None)  # type: ignore[arg-type]

    assert calls == 0
    assert client.exited == 1


@pytest.mark.asyncio
async def test_interactive_reports_protocol_errors_and_continues() -> None:
    client = _FakeClient(raise_on="explode")
    prompt = _prompt(["explode", "{}", "getLifelogs", "", "quit"])
    err: List[str] = []

    calls = await run_interactive(client, prompt=prompt, echo=lambda _: None, report=err.append)  # type: ignore[arg-type]

    assert calls == 2
    assert err == ["Error: Tool invocation failed for 'explode': protocol failure"]
    assert client.calls[-1] == ("getLifelogs", {})
