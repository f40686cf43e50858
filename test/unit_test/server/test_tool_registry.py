from __future__ import annotations

from typing import List, Optional

import pytest

from lifelog_mcp.lifelogs_api.models import LifelogQuery
from lifelog_mcp.schemas.core import ToolDescriptor, ToolResult
from lifelog_mcp.server.registry import ToolRegistry


def _descriptor(name: str = "getLifelogs") -> ToolDescriptor:
    return ToolDescriptor.for_model(name, "Retrieve a list of lifelogs.", LifelogQuery)


class _RecordingHandler:
    def __init__(self, result: Optional[ToolResult] = None, error: Optional[Exception] = None) -> None:
        self.calls: List[LifelogQuery] = []
        self._result = result or ToolResult.success("ok")
        self._error = error

    async def __call__(self, query: LifelogQuery) -> ToolResult:
        self.calls.append(query)
        if self._error is not None:
            raise self._error
        return self._result


def test_register_and_list_tools() -> None:
    registry = ToolRegistry()
    registry.register_tool(_descriptor(), _RecordingHandler(), LifelogQuery)

    tools = registry.list_tools()
    assert [t.name for t in tools] == ["getLifelogs"]
    assert "includeMarkdown" in tools[0].input_schema["properties"]
    assert "getLifelogs" in registry and len(registry) == 1


def test_duplicate_tool_name_is_rejected() -> None:
    registry = ToolRegistry()
    registry.register_tool(_descriptor(), _RecordingHandler(), LifelogQuery)

    with pytest.raises(ValueError):
        registry.register_tool(_descriptor(), _RecordingHandler(), LifelogQuery)


@pytest.mark.asyncio
async def test_call_tool_passes_validated_model_to_handler() -> None:
    handler = _RecordingHandler(ToolResult.success("done"))
    registry = ToolRegistry()
    registry.register_tool(_descriptor(), handler, LifelogQuery)

    result = await registry.call_tool("getLifelogs", {"limit": 3, "includeHeadings": False})

    assert result == ToolResult.success("done")
    assert handler.calls == [LifelogQuery(limit=3, include_headings=False)]


@pytest.mark.asyncio
async def test_unknown_tool_yields_failure_result() -> None:
    registry = ToolRegistry()

    result = await registry.call_tool("nope", {})

    assert result.is_error is True
    assert result.text == "Unknown tool: nope"


@pytest.mark.asyncio
async def test_invalid_arguments_are_rejected_before_handler_runs() -> None:
    handler = _RecordingHandler()
    registry = ToolRegistry()
    registry.register_tool(_descriptor(), handler, LifelogQuery)

    result = await registry.call_tool("getLifelogs", {"direction": "sideways"})

    assert result.is_error is True
    assert result.text.startswith("Invalid arguments for getLifelogs:")
    assert "direction" in result.text
    assert handler.calls == []


@pytest.mark.asyncio
async def test_unexpected_handler_exception_becomes_failure_result() -> None:
    registry = ToolRegistry()
    registry.register_tool(_descriptor(), _RecordingHandler(error=KeyError("boom")), LifelogQuery)

    result = await registry.call_tool("getLifelogs", None)

    assert result.is_error is True
    assert "boom" in result.text


def test_tool_result_states_are_exclusive() -> None:
    ok = ToolResult.success('{"a": 1}')
    failed = ToolResult.failure("Error fetching lifelogs: x")

    assert (ok.is_error, failed.is_error) == (False, True)
    assert ok.model_dump(by_alias=True) == {"text": '{"a": 1}', "isError": False}
