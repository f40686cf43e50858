from __future__ import annotations

from typing import Any, Dict, Type

from pydantic import BaseModel, ConfigDict, Field

from .base import BaseSchema


class ToolDescriptor(BaseSchema):
    name: str = Field(..., description="Unique tool name.", min_length=1, max_length=128)
    description: str = Field("", description="Human-readable description of what the tool does.")
    input_schema: Dict[str, Any] = Field(
        default_factory=dict,
        description="JSON schema of the tool arguments, advertised to clients.",
    )

    @classmethod
    def for_model(cls, name: str, description: str, arguments_model: Type[BaseModel]) -> "ToolDescriptor":
        """Describe a tool whose arguments are validated by ``arguments_model``."""
        return cls(
            name=name,
            description=description,
            input_schema=arguments_model.model_json_schema(by_alias=True),
        )


class ToolResult(BaseSchema):
    """Outcome of a tool invocation.

    Either a success payload or an error message; ``is_error`` is set if and
    only if ``text`` is an error message. Use :meth:`success` and
    :meth:`failure` rather than the constructor.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Textual payload; serialized JSON on success, error message on failure.")
    is_error: bool = Field(False, description="Whether the invocation failed.")

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(text=text, is_error=False)

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(text=message, is_error=True)
