"""Pydantic model for the restricted JSON schema used by agents."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SchemaType = Literal["object", "string", "integer", "number", "boolean", "array"]


class Schema(BaseModel):
    # Unknown keywords are kept so the validator still sees them.
    model_config = ConfigDict(extra="allow", frozen=True)

    type: Optional[SchemaType] = None
    properties: dict[str, Schema] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)
    enum: Optional[list[Any]] = None
    description: str = ""
    items: Optional[Schema] = None

    @field_validator("required")
    @classmethod
    def _dedupe_required(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))

    def to_json_schema(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True, exclude_defaults=True)


def load_schema_file(path: Path) -> Schema | None:
    """
    Reads an optional ``*.jsonschema`` document.
    Returns None when the file is absent; malformed documents raise.
    """
    if not path.is_file():
        return None
    return Schema.model_validate_json(path.read_text(encoding="utf-8"))
