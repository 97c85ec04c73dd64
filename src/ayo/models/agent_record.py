"""A fully loaded agent: resolved paths, composed prompt, config and schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ayo.models.agent_config import AgentConfig
from ayo.models.schema import Schema
from ayo.models.skill_metadata import SkillMetadata


@dataclass(frozen=True)
class AgentRecord:
    handle: str
    directory: Path
    model: str
    system: str  # agent's own system.md, trimmed
    combined_system: str
    config: AgentConfig = field(default_factory=AgentConfig)
    builtin: bool = False
    skills: tuple[SkillMetadata, ...] = ()
    skills_warnings: tuple[str, ...] = ()
    # Kept out of combined_system so callers can place them as they like.
    skills_prompt: str = ""
    tools_prompt: str = ""
    delegates_prompt: str = ""
    input_schema: Optional[Schema] = None
    output_schema: Optional[Schema] = None

    @property
    def description(self) -> str:
        return self.config.description

    def has_input_schema(self) -> bool:
        return self.input_schema is not None

    def has_output_schema(self) -> bool:
        return self.output_schema is not None

    def is_chainable(self) -> bool:
        return self.input_schema is not None or self.output_schema is not None
