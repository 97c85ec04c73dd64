"""Pydantic models for discovered skills."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SkillSource(str, Enum):
    AGENT = "agent"
    SHARED = "shared"
    BUILTIN = "builtin"
    PLUGIN = "plugin"


class SkillMetadata(BaseModel):
    name: str
    description: str
    license: str = ""
    compatibility: str = ""
    allowed_tools: str = ""
    metadata: dict[str, str] = Field(default_factory=dict)

    path: str = ""  # absolute path to SKILL.md
    source: SkillSource = SkillSource.AGENT
    has_scripts: bool = False
    has_references: bool = False
    has_assets: bool = False


class SkillFilter(BaseModel):
    include: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)
    ignore_builtin: bool = False
    ignore_shared: bool = False


class DiscoveryResult(BaseModel):
    skills: list[SkillMetadata] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
