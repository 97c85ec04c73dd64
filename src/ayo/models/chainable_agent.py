"""An agent paired with its compatibility relative to a reference agent."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from ayo.models.agent_record import AgentRecord


class CompatibilityTier(IntEnum):
    NONE = 0
    FREEFORM = 1  # target accepts any input
    STRUCTURAL = 2  # output carries every required input field
    EXACT = 3

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class ChainableAgent:
    agent: AgentRecord
    compatibility: CompatibilityTier

    @property
    def handle(self) -> str:
        return self.agent.handle
