"""Read-only access to the plugin registry."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ayo.errors import ConfigError
from ayo.handles import normalize_handle
from ayo.models.installed_plugin import InstalledPlugin, PluginRegistry


@dataclass(frozen=True)
class PluginAgentInfo:
    handle: str
    plugin_name: str


def load_plugin_registry(path: Path) -> PluginRegistry:
    if not path.exists():
        return PluginRegistry()
    try:
        return PluginRegistry.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"read plugin registry {path}: {exc}") from exc


def list_plugin_agents(plugins: list[InstalledPlugin] | tuple[InstalledPlugin, ...]) -> list[PluginAgentInfo]:
    infos: list[PluginAgentInfo] = []
    for plugin in plugins:
        for handle in plugin.agents:
            infos.append(PluginAgentInfo(handle=normalize_handle(handle), plugin_name=plugin.name))
    return infos


def plugin_provides_tool(plugins: list[InstalledPlugin] | tuple[InstalledPlugin, ...], tool_name: str) -> bool:
    return any(tool_name in plugin.tools for plugin in plugins)
