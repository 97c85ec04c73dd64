"""Ordered candidate directories for agent lookup."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ayo.context import ResolutionContext


def _normalize(directory: Path) -> Path:
    return directory.expanduser().resolve(strict=False)


def resolve_agent_dirs(context: ResolutionContext) -> list[Path]:
    """
    Returns base directories in lookup order, most specific first:
    project config, project data, user config, the configured agents dir,
    installed bundled defaults, then plugin agent dirs.
    Directories are not checked for existence here.
    """
    dirs: list[Path] = []

    def add(directory: Optional[Path]) -> None:
        if directory is None:
            return
        normalized = _normalize(directory)
        if normalized not in dirs:
            dirs.append(normalized)

    paths = context.paths
    for root in (paths.local_config_dir, paths.local_data_dir):
        if root is not None:
            add(root / "agents")
    add(paths.user_agents_dir)
    # The configured dir lands right before the bundled defaults unless already listed.
    add(context.configured_agents_dir)
    add(paths.builtin_agents_dir)
    for plugin_dir in context.plugin_agent_dirs():
        add(plugin_dir)
    return dirs


def is_builtin_dir(context: ResolutionContext, directory: Path) -> bool:
    return _normalize(directory) == _normalize(context.paths.builtin_agents_dir)
