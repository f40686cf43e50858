"""Tool registry.

Holds the tools a server exposes, keyed by unique name. Each entry pairs a
``ToolDescriptor`` with an async handler and the Pydantic model used to
validate incoming arguments. ``call_tool`` validates before dispatching and
always answers with a ``ToolResult``: unknown tools, rejected arguments and
unexpected handler exceptions all become failure results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Protocol, Type

from pydantic import BaseModel, ValidationError

from lifelog_mcp.schemas.core import ToolDescriptor, ToolResult

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Any], Awaitable[ToolResult]]


class SupportsToolRegistration(Protocol):
    """Anything tools can be registered on: a ``ToolRegistry`` or a server."""

    def register_tool(
        self, descriptor: ToolDescriptor, handler: ToolHandler, arguments_model: Type[BaseModel]
    ) -> None: ...


def format_validation_error(error: ValidationError) -> str:
    """Render a ``ValidationError`` as ``field: message`` pairs."""
    parts: List[str] = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ())) or "arguments"
        parts.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "; ".join(parts)


@dataclass(frozen=True)
class RegisteredTool:
    descriptor: ToolDescriptor
    handler: ToolHandler
    arguments_model: Type[BaseModel]


class ToolRegistry:
    """Name-keyed collection of tools with validated dispatch."""

    def __init__(self) -> None:
        self._tools: Dict[str, RegisteredTool] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def register_tool(self, descriptor: ToolDescriptor, handler: ToolHandler, arguments_model: Type[BaseModel]) -> None:
        """Register ``handler`` under ``descriptor.name``.

        Args:
            descriptor: Public description of the tool.
            handler: Coroutine function receiving a validated ``arguments_model``
                instance and returning a ``ToolResult``.
            arguments_model: Pydantic model validating incoming arguments.

        Raises:
            ValueError: If a tool with the same name is already registered.
        """
        if descriptor.name in self._tools:
            raise ValueError(f"Tool already registered: '{descriptor.name}'")
        self._tools[descriptor.name] = RegisteredTool(descriptor, handler, arguments_model)
        logger.debug("ToolRegistry.register_tool: %s", descriptor.name)

    def list_tools(self) -> List[ToolDescriptor]:
        return [t.descriptor for t in self._tools.values()]

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        """Validate ``arguments`` and invoke the named tool.

        Returns:
            The handler's ``ToolResult``, or a failure result when the tool is
            unknown, the arguments are rejected, or the handler raised.
        """
        tool = self._tools.get(name)
        if tool is None:
            logger.info("ToolRegistry.call_tool: unknown tool %r", name)
            return ToolResult.failure(f"Unknown tool: {name}")
        try:
            parsed = tool.arguments_model.model_validate(dict(arguments or {}))
        except ValidationError as e:
            logger.info("ToolRegistry.call_tool: rejected arguments for %s", name)
            return ToolResult.failure(f"Invalid arguments for {name}: {format_validation_error(e)}")
        logger.debug("ToolRegistry.call_tool: %s args_keys=%s", name, list((arguments or {}).keys()))
        try:
            return await tool.handler(parsed)
        except Exception as e:
            logger.exception("ToolRegistry.call_tool: handler for %s raised", name)
            return ToolResult.failure(f"Error executing tool {name}: {e}")
