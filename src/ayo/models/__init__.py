"""Model types for agent configuration, resolution and chaining."""

from ayo.models.agent_config import AgentConfig
from ayo.models.agent_record import AgentRecord
from ayo.models.chainable_agent import ChainableAgent
from ayo.models.chainable_agent import CompatibilityTier
from ayo.models.cli_config import CliConfig
from ayo.models.installed_plugin import InstalledPlugin
from ayo.models.installed_plugin import PluginRegistry
from ayo.models.schema import Schema
from ayo.models.skill_metadata import DiscoveryResult
from ayo.models.skill_metadata import SkillFilter
from ayo.models.skill_metadata import SkillMetadata
from ayo.models.skill_metadata import SkillSource

__all__ = [
    "AgentConfig",
    "AgentRecord",
    "ChainableAgent",
    "CliConfig",
    "CompatibilityTier",
    "DiscoveryResult",
    "InstalledPlugin",
    "PluginRegistry",
    "Schema",
    "SkillFilter",
    "SkillMetadata",
    "SkillSource",
]
