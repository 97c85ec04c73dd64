"""Explicit resolution context threaded through the resolver and loader."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ayo.config import load_cli_config
from ayo.models.cli_config import CliConfig
from ayo.models.installed_plugin import InstalledPlugin
from ayo.paths import AyoPaths
from ayo.plugins import load_plugin_registry


@dataclass(frozen=True)
class ResolutionContext:
    paths: AyoPaths
    config: CliConfig = field(default_factory=CliConfig)
    plugins: tuple[InstalledPlugin, ...] = ()  # enabled plugins, name order

    @classmethod
    def from_environment(cls, config_path: Optional[Path] = None) -> "ResolutionContext":
        paths = AyoPaths.from_environment()
        config = load_cli_config(config_path or paths.config_file)
        registry = load_plugin_registry(paths.plugin_registry_file)
        return cls(paths=paths, config=config, plugins=tuple(registry.enabled()))

    @property
    def configured_agents_dir(self) -> Path:
        if self.config.agents_dir:
            return Path(self.config.agents_dir).expanduser()
        return self.paths.user_agents_dir

    @property
    def configured_skills_dir(self) -> Path:
        if self.config.skills_dir:
            return Path(self.config.skills_dir).expanduser()
        return self.paths.user_skills_dir

    def plugin_agent_dirs(self) -> list[Path]:
        return [plugin.agents_dir for plugin in self.plugins]

    def plugin_skills_dirs(self) -> list[Path]:
        return [plugin.skills_dir for plugin in self.plugins]

    def shared_skills_dirs(self) -> list[Path]:
        dirs: list[Path] = []
        for candidate in (*self.paths.local_skills_dirs(), self.configured_skills_dir):
            if candidate not in dirs:
                dirs.append(candidate)
        return dirs
