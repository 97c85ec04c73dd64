"""Pydantic model for an agent's config.json."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ayo.handles import is_reserved_namespace

CONFIG_FILENAME = "config.json"


class AgentConfig(BaseModel):
    # Typos in config.json should fail loudly rather than fall back to defaults.
    model_config = ConfigDict(extra="forbid")

    model: str = ""
    system_file: str = ""
    description: str = ""
    delegate_hint: str = ""
    allowed_tools: list[str] = Field(default_factory=list)
    no_system_wrapper: bool = False
    ignore_shared_system_message: bool = False

    skills: list[str] = Field(default_factory=list)
    exclude_skills: list[str] = Field(default_factory=list)
    ignore_builtin_skills: bool = False
    ignore_shared_skills: bool = False

    delegates: dict[str, str] = Field(default_factory=dict)  # task type -> handle
    guardrails: Optional[bool] = None  # None means enabled

    def guardrails_enabled(self, handle: str) -> bool:
        if is_reserved_namespace(handle):
            return True
        return self.guardrails is not False


def load_agent_config(agent_dir: Path) -> AgentConfig:
    config_path = agent_dir / CONFIG_FILENAME
    if not config_path.exists():
        return AgentConfig()
    return AgentConfig.model_validate_json(config_path.read_text(encoding="utf-8"))
