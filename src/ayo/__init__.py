"""Public package exports."""

from ayo.agent_registry import AgentRegistry
from ayo.chaining import find_downstream
from ayo.chaining import find_upstream
from ayo.compatibility import can_chain_to
from ayo.compatibility import check_compatibility
from ayo.compatibility import schemas_equal
from ayo.context import ResolutionContext
from ayo.models.agent_record import AgentRecord
from ayo.models.chainable_agent import ChainableAgent
from ayo.models.chainable_agent import CompatibilityTier
from ayo.models.schema import Schema
from ayo.orchestrator import Orchestrator

__all__ = [
    "AgentRecord",
    "AgentRegistry",
    "ChainableAgent",
    "CompatibilityTier",
    "Orchestrator",
    "ResolutionContext",
    "Schema",
    "can_chain_to",
    "check_compatibility",
    "find_downstream",
    "find_upstream",
    "schemas_equal",
]
