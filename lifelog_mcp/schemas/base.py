"""Shared pydantic base for wire-facing models.

Everything that crosses a process boundary (tool arguments, tool results,
tool descriptors, Limitless query parameters) is camelCase on the wire and
snake_case in Python. :class:`BaseSchema` fixes that convention in one place.
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base for wire-facing models.

    - Unknown fields are rejected
    - Either the Python name or the camelCase alias is accepted on input
    - Output via :meth:`to_wire` always uses the camelCase aliases
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        alias_generator=to_camel,
    )

    def to_wire(self, *, exclude_none: bool = False) -> Dict[str, Any]:
        """Dump to a JSON-compatible dict keyed by wire names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=exclude_none)
