"""Pydantic model for the global ayo configuration file."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CliConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_url: Optional[str] = Field(default=None, alias="$schema")
    agents_dir: Optional[str] = None
    skills_dir: Optional[str] = None
    system_prefix: Optional[str] = None
    system_suffix: Optional[str] = None
    shared_system_message: Optional[str] = None
    default_model: str = "gpt-4.1"
    delegates: dict[str, str] = Field(default_factory=dict)  # task type -> handle
    default_tools: dict[str, str] = Field(default_factory=dict)  # tool alias -> tool name
