"""Top-level entry point tying the context, registry and chain queries together."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ayo.agent_registry import AgentRegistry, Installer
from ayo.chaining import find_downstream, find_upstream, load_chainable
from ayo.context import ResolutionContext
from ayo.models.agent_config import AgentConfig
from ayo.models.agent_record import AgentRecord
from ayo.models.chainable_agent import ChainableAgent
from ayo.models.schema import Schema


class Orchestrator:
    def __init__(self, context: ResolutionContext, installer: Optional[Installer] = None) -> None:
        self.context: ResolutionContext = context
        self.registry: AgentRegistry = AgentRegistry(context, installer=installer)

    @classmethod
    def from_environment(cls, config_path: Optional[Path] = None) -> "Orchestrator":
        return cls(ResolutionContext.from_environment(config_path))

    def load(self, handle: str) -> AgentRecord:
        return self.registry.get(handle)

    def list_handles(self) -> list[str]:
        return self.registry.list_handles()

    def create(
        self,
        handle: str,
        config: AgentConfig,
        system_message: str,
        input_schema: Optional[Schema] = None,
        output_schema: Optional[Schema] = None,
    ) -> AgentRecord:
        return self.registry.save(handle, config, system_message, input_schema, output_schema)

    def downstream(self, handle: str) -> list[ChainableAgent]:
        return find_downstream(self.registry, self.load(handle))

    def upstream(self, handle: str) -> list[ChainableAgent]:
        return find_upstream(self.registry, self.load(handle))

    def chainable(self) -> list[AgentRecord]:
        return load_chainable(self.registry)
