"""Task-type delegation: which agent handles a given kind of work."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ayo.context import ResolutionContext
from ayo.handles import normalize_handle

logger = logging.getLogger(__name__)


class DelegateSource(str, Enum):
    NONE = "none"
    DIRECTORY = "directory"
    AGENT = "agent"
    GLOBAL = "global"


@dataclass(frozen=True)
class DelegateResolution:
    task_type: str
    handle: str = ""
    source: DelegateSource = DelegateSource.NONE

    @property
    def found(self) -> bool:
        return self.source is not DelegateSource.NONE


class DirectoryConfig(BaseModel):
    """Per-project .ayo.json."""

    model_config = ConfigDict(extra="allow")

    agent: str = ""
    model: str = ""
    delegates: dict[str, str] = Field(default_factory=dict)


def load_directory_config(path: Optional[Path]) -> Optional[DirectoryConfig]:
    """A malformed .ayo.json is ignored with a warning rather than blocking every lookup."""
    if path is None:
        return None
    try:
        return DirectoryConfig.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValidationError) as exc:
        logger.warning("Ignoring directory config %s: %s", path, exc)
        return None


def resolve_delegate(
    task_type: str,
    agent_delegates: Mapping[str, str],
    context: ResolutionContext,
) -> DelegateResolution:
    """
    Priority: directory config found walking up from the cwd,
    then the agent's own delegates, then the global config.
    """
    dir_config = load_directory_config(context.paths.find_directory_config())
    if dir_config is not None and dir_config.delegates.get(task_type):
        return DelegateResolution(
            task_type, normalize_handle(dir_config.delegates[task_type]), DelegateSource.DIRECTORY
        )
    if agent_delegates.get(task_type):
        return DelegateResolution(task_type, normalize_handle(agent_delegates[task_type]), DelegateSource.AGENT)
    if context.config.delegates.get(task_type):
        return DelegateResolution(
            task_type, normalize_handle(context.config.delegates[task_type]), DelegateSource.GLOBAL
        )
    return DelegateResolution(task_type)


def merge_delegates(agent_delegates: Mapping[str, str], context: ResolutionContext) -> dict[str, str]:
    """Effective task type -> handle map, higher priority sources overriding lower ones."""
    merged: dict[str, str] = {}
    dir_config = load_directory_config(context.paths.find_directory_config())
    layers = [context.config.delegates, agent_delegates]
    if dir_config is not None:
        layers.append(dir_config.delegates)
    for layer in layers:
        for task_type, handle in layer.items():
            if handle:
                merged[task_type] = normalize_handle(handle)
    return merged


def build_delegates_prompt(delegates: Mapping[str, str]) -> str:
    if not delegates:
        return ""
    lines = [
        "<delegates>",
        "The following task types are handled by specialized agents. Use agent_call to delegate them:",
        "",
    ]
    for task_type in sorted(delegates):
        lines.append(f"- {task_type}: {delegates[task_type]}")
    lines.append("</delegates>")
    return "\n".join(lines)
