"""
On-disk layout for ayo.

Lookup priority, first found wins:
  1. ./.config/ayo        project-local config
  2. ./.local/share/ayo   project-local data
  3. ~/.config/ayo        user config (user agents, skills, prompts, config.yaml)
  4. ~/.local/share/ayo   user data (installed bundled defaults, plugin registry)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

APP_NAME = "ayo"
DIRECTORY_CONFIG_FILENAME = ".ayo.json"


@dataclass(frozen=True)
class AyoPaths:
    home: Path
    cwd: Optional[Path] = None

    @classmethod
    def from_environment(cls) -> "AyoPaths":
        try:
            cwd: Optional[Path] = Path.cwd()
        except OSError:
            cwd = None
        return cls(home=Path.home(), cwd=cwd)

    @property
    def local_config_dir(self) -> Optional[Path]:
        if self.cwd is None:
            return None
        return self.cwd / ".config" / APP_NAME

    @property
    def local_data_dir(self) -> Optional[Path]:
        if self.cwd is None:
            return None
        return self.cwd / ".local" / "share" / APP_NAME

    @property
    def user_config_dir(self) -> Path:
        return self.home / ".config" / APP_NAME

    @property
    def user_data_dir(self) -> Path:
        return self.home / ".local" / "share" / APP_NAME

    @property
    def config_file(self) -> Path:
        return self.user_config_dir / "config.yaml"

    @property
    def user_agents_dir(self) -> Path:
        return self.user_config_dir / "agents"

    @property
    def user_skills_dir(self) -> Path:
        return self.user_config_dir / "skills"

    @property
    def builtin_agents_dir(self) -> Path:
        return self.user_data_dir / "agents"

    @property
    def builtin_skills_dir(self) -> Path:
        return self.user_data_dir / "skills"

    @property
    def version_file(self) -> Path:
        return self.user_data_dir / ".builtin-version"

    @property
    def plugin_registry_file(self) -> Path:
        return self.user_data_dir / "packages.json"

    def _search_roots(self) -> list[Path]:
        roots = [self.local_config_dir, self.local_data_dir, self.user_config_dir, self.user_data_dir]
        return [root for root in roots if root is not None]

    def local_skills_dirs(self) -> list[Path]:
        return [root / "skills" for root in (self.local_config_dir, self.local_data_dir) if root is not None]

    def prompt_dirs(self) -> list[Path]:
        return [root / "prompts" for root in self._search_roots()]

    def find_prompt_file(self, name: str) -> Optional[Path]:
        for prompt_dir in self.prompt_dirs():
            candidate = prompt_dir / name
            if candidate.is_file():
                return candidate
        return None

    def find_directory_config(self) -> Optional[Path]:
        """Walks up from the working directory looking for .ayo.json."""
        if self.cwd is None:
            return None
        for directory in (self.cwd, *self.cwd.parents):
            candidate = directory / DIRECTORY_CONFIG_FILENAME
            if candidate.is_file():
                return candidate
        return None
