"""Pydantic schemas shared by the server and client layers."""

from .core import ToolDescriptor, ToolResult

__all__ = [
    "ToolDescriptor",
    "ToolResult",
]
