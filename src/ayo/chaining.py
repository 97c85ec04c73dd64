"""Upstream and downstream queries over the known agents."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from ayo.agent_registry import AgentRegistry
from ayo.compatibility import check_compatibility
from ayo.errors import AgentError
from ayo.models.agent_record import AgentRecord
from ayo.models.chainable_agent import ChainableAgent, CompatibilityTier

logger = logging.getLogger(__name__)


def sort_chainable(results: Iterable[ChainableAgent]) -> list[ChainableAgent]:
    """Best compatibility first, then by handle."""
    return sorted(results, key=lambda item: (-int(item.compatibility), item.handle))


def _load_others(registry: AgentRegistry, exclude: str) -> Iterator[AgentRecord]:
    # Load failures are logged and skipped.
    for handle in registry.list_handles():
        if handle == exclude:
            continue
        try:
            yield registry.get(handle)
        except AgentError as exc:
            logger.warning("Skipping %s: %s", handle, exc)


def find_downstream(registry: AgentRegistry, source: AgentRecord) -> list[ChainableAgent]:
    """Agents that can consume the source's output."""
    if source.output_schema is None:
        return []
    results = []
    for candidate in _load_others(registry, source.handle):
        tier = check_compatibility(source.output_schema, candidate.input_schema)
        if tier is not CompatibilityTier.NONE:
            results.append(ChainableAgent(candidate, tier))
    return sort_chainable(results)


def find_upstream(registry: AgentRegistry, target: AgentRecord) -> list[ChainableAgent]:
    """Agents whose output the target can consume."""
    results = []
    for candidate in _load_others(registry, target.handle):
        if candidate.output_schema is None:
            continue
        tier = check_compatibility(candidate.output_schema, target.input_schema)
        if tier is not CompatibilityTier.NONE:
            results.append(ChainableAgent(candidate, tier))
    return sort_chainable(results)


def is_chainable(agent: AgentRecord) -> bool:
    return agent.is_chainable()


def list_chainable(agents: Iterable[AgentRecord]) -> list[AgentRecord]:
    return [agent for agent in agents if is_chainable(agent)]


def load_chainable(registry: AgentRegistry) -> list[AgentRecord]:
    return list_chainable(_load_others(registry, exclude=""))
