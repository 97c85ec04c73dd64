"""Pydantic models for the plugin registry (packages.json)."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class InstalledPlugin(BaseModel):
    name: str
    version: str = ""
    path: str
    agents: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    disabled: bool = False

    @property
    def agents_dir(self) -> Path:
        return Path(self.path) / "agents"

    @property
    def skills_dir(self) -> Path:
        return Path(self.path) / "skills"


class PluginRegistry(BaseModel):
    version: int = 1
    plugins: dict[str, InstalledPlugin] = Field(default_factory=dict)

    def enabled(self) -> list[InstalledPlugin]:
        return [self.plugins[name] for name in sorted(self.plugins) if not self.plugins[name].disabled]
