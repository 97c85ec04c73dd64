"""Bundled default agents and skills shipped inside the package."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

from ayo.handles import normalize_handle
from ayo.models.agent_config import CONFIG_FILENAME, AgentConfig
from ayo.paths import AyoPaths

logger = logging.getLogger(__name__)

# Bump when bundled content changes so existing installs are refreshed.
BUILTIN_VERSION = "1"


@dataclass(frozen=True)
class BuiltinAgentInfo:
    handle: str
    description: str
    delegate_hint: str


def _bundle_root() -> Traversable:
    return resources.files("ayo").joinpath("bundled")


def _agents_root() -> Traversable:
    return _bundle_root().joinpath("agents")


def list_agents() -> list[str]:
    root = _agents_root()
    if not root.is_dir():
        return []
    return sorted(entry.name for entry in root.iterdir() if entry.is_dir() and entry.name.startswith("@"))


def has_agent(handle: str) -> bool:
    return normalize_handle(handle) in list_agents()


def list_agent_infos() -> list[BuiltinAgentInfo]:
    infos: list[BuiltinAgentInfo] = []
    for handle in list_agents():
        config_file = _agents_root().joinpath(handle).joinpath(CONFIG_FILENAME)
        config = AgentConfig()
        if config_file.is_file():
            config = AgentConfig.model_validate_json(config_file.read_text(encoding="utf-8"))
        infos.append(
            BuiltinAgentInfo(handle=handle, description=config.description, delegate_hint=config.delegate_hint)
        )
    return infos


def needs_install(paths: AyoPaths) -> bool:
    try:
        installed = paths.version_file.read_text(encoding="utf-8").strip()
    except OSError:
        return True
    return installed != BUILTIN_VERSION


def _copy_tree(source: Traversable, destination: Path) -> None:
    destination.mkdir(parents=True, exist_ok=True)
    for entry in source.iterdir():
        target = destination / entry.name
        if entry.is_dir():
            _copy_tree(entry, target)
        else:
            target.write_bytes(entry.read_bytes())


def install_bundled_defaults(paths: AyoPaths, *, force: bool = False) -> Path:
    """
    Extracts bundled agents and skills into the user data directory.
    Skips the work when the version marker is current, unless forced.
    Returns the agents install directory.
    """
    if not force and not needs_install(paths):
        return paths.builtin_agents_dir
    logger.info("Installing bundled agents into %s", paths.builtin_agents_dir)
    _copy_tree(_agents_root(), paths.builtin_agents_dir)
    skills_root = _bundle_root().joinpath("skills")
    if skills_root.is_dir():
        _copy_tree(skills_root, paths.builtin_skills_dir)
    paths.version_file.parent.mkdir(parents=True, exist_ok=True)
    paths.version_file.write_text(BUILTIN_VERSION, encoding="utf-8")
    return paths.builtin_agents_dir


@dataclass(frozen=True)
class ModifiedAgent:
    handle: str
    installed_dir: Path
    modified_files: tuple[str, ...]


def _bundled_files(root: Traversable, prefix: str = "") -> dict[str, Traversable]:
    files: dict[str, Traversable] = {}
    for entry in root.iterdir():
        rel = f"{prefix}{entry.name}"
        if entry.is_dir():
            files.update(_bundled_files(entry, rel + "/"))
        else:
            files[rel] = entry
    return files


def compare_agent_files(handle: str, installed_dir: Path) -> list[str]:
    """
    Lists files of an installed bundled agent that differ from the packaged copy.
    Missing files are marked "(deleted)", files only present locally "(added)".
    """
    bundled = _bundled_files(_agents_root().joinpath(handle))
    changed: list[str] = []
    for rel, source in sorted(bundled.items()):
        target = installed_dir / rel
        if not target.is_file():
            changed.append(f"{rel} (deleted)")
        elif target.read_bytes() != source.read_bytes():
            changed.append(rel)
    for path in sorted(installed_dir.rglob("*")):
        rel = path.relative_to(installed_dir).as_posix()
        if path.is_file() and rel not in bundled:
            changed.append(f"{rel} (added)")
    return changed


def check_modified_agents(paths: AyoPaths) -> list[ModifiedAgent]:
    """Installed bundled agents whose files were edited locally."""
    modified: list[ModifiedAgent] = []
    for handle in list_agents():
        installed_dir = paths.builtin_agents_dir / handle
        if not installed_dir.is_dir():
            continue
        changed = compare_agent_files(handle, installed_dir)
        if changed:
            modified.append(ModifiedAgent(handle=handle, installed_dir=installed_dir, modified_files=tuple(changed)))
    return modified
