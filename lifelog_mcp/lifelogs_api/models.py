"""Query models for the Limitless lifelogs endpoint.

``LifelogQuery`` mirrors the query parameters of ``GET /v1/lifelogs``. It is
both the validation model for ``getLifelogs`` tool arguments and the source of
the tool's advertised JSON schema. Field names are snake_case in Python and
camelCase on the wire (``include_markdown`` <-> ``includeMarkdown``).
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import ConfigDict, Field, field_validator

from lifelog_mcp.schemas.base import BaseSchema

Direction = Literal["asc", "desc"]


class LifelogQuery(BaseSchema):
    """Filters for listing lifelogs.

    Validation is strict: unknown fields and values of the wrong type are
    rejected instead of coerced. The one exception is ``limit``, which also
    accepts a whole-number float such as ``10.0``.
    """

    model_config = ConfigDict(strict=True)

    timezone: Optional[str] = Field(None, description="IANA timezone used to interpret dates, e.g. 'America/New_York'.")
    date: Optional[str] = Field(None, description="Return lifelogs for this date (YYYY-MM-DD).")
    start: Optional[str] = Field(None, description="Start of the time range (YYYY-MM-DD or YYYY-MM-DD HH:mm:SS).")
    end: Optional[str] = Field(None, description="End of the time range (YYYY-MM-DD or YYYY-MM-DD HH:mm:SS).")
    cursor: Optional[str] = Field(None, description="Pagination cursor returned by a previous response.")
    direction: Direction = Field("desc", description="Sort direction by start time.")
    include_markdown: bool = Field(True, description="Include markdown content in the response.")
    include_headings: bool = Field(True, description="Include headings in the response.")
    limit: Optional[int] = Field(None, description="Maximum number of lifelogs to return.", ge=1)

    @field_validator("limit", mode="before")
    @classmethod
    def _whole_number_limit(cls, value: Any) -> Any:
        # JSON clients may send 10.0 for 10; bools and fractional values stay invalid.
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value

    def to_query_params(self) -> Dict[str, object]:
        """Return the wire-named fields that are set, defaults included, ``None`` omitted."""
        return self.to_wire(exclude_none=True)
