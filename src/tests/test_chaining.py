import json
import logging
from pathlib import Path
from typing import Any

import pytest

from ayo.agent_registry import AgentRegistry
from ayo.chaining import find_downstream
from ayo.chaining import find_upstream
from ayo.chaining import is_chainable
from ayo.chaining import list_chainable
from ayo.chaining import load_chainable
from ayo.chaining import sort_chainable
from ayo.context import ResolutionContext
from ayo.models import AgentRecord
from ayo.models import ChainableAgent
from ayo.models import CompatibilityTier
from ayo.models import Schema
from ayo.paths import AyoPaths

PERSON = {
    "type": "object",
    "properties": {"name": {"type": "string"}, "age": {"type": "integer"}},
    "required": ["name", "age"],
}
NAME_ONLY = {"type": "object", "properties": {"name": {"type": "string"}}, "required": ["name"]}
NEEDS_EMAIL = {"type": "object", "properties": {"email": {"type": "string"}}, "required": ["email"]}


def _skip_install(paths: AyoPaths) -> Path:
    return paths.builtin_agents_dir


class CountingRegistry(AgentRegistry):
    def __init__(self, context: ResolutionContext) -> None:
        super().__init__(context, installer=_skip_install)
        self.gets: list[str] = []

    def get(self, handle: str) -> AgentRecord:
        self.gets.append(handle)
        return super().get(handle)


def _registry(tmp_path: Path) -> CountingRegistry:
    return CountingRegistry(ResolutionContext(paths=AyoPaths(home=tmp_path / "home", cwd=tmp_path / "project")))


def _add(registry: AgentRegistry, handle: str, input_schema: Any = None, output_schema: Any = None) -> None:
    agent_dir = registry.context.paths.user_agents_dir / handle
    agent_dir.mkdir(parents=True)
    (agent_dir / "system.md").write_text(f"I am {handle}.", encoding="utf-8")
    if input_schema is not None:
        (agent_dir / "input.jsonschema").write_text(json.dumps(input_schema), encoding="utf-8")
    if output_schema is not None:
        (agent_dir / "output.jsonschema").write_text(json.dumps(output_schema), encoding="utf-8")


def _record(handle: str, input_schema: Any = None, output_schema: Any = None) -> AgentRecord:
    return AgentRecord(
        handle=handle,
        directory=Path("/agents") / handle,
        model="m",
        system="s",
        combined_system="s",
        input_schema=Schema.model_validate(input_schema) if input_schema is not None else None,
        output_schema=Schema.model_validate(output_schema) if output_schema is not None else None,
    )


def test_find_downstream_sorts_by_tier_then_handle(tmp_path: Path) -> None:
    registry = _registry(tmp_path)
    _add(registry, "@src", output_schema=PERSON)
    _add(registry, "@exact", input_schema=PERSON)
    _add(registry, "@struct", input_schema=NAME_ONLY)
    _add(registry, "@free")
    _add(registry, "@bfree")
    _add(registry, "@nomatch", input_schema=NEEDS_EMAIL)

    results = find_downstream(registry, registry.get("@src"))

    assert [(item.handle, item.compatibility) for item in results] == [
        ("@exact", CompatibilityTier.EXACT),
        ("@struct", CompatibilityTier.STRUCTURAL),
        ("@bfree", CompatibilityTier.FREEFORM),
        ("@free", CompatibilityTier.FREEFORM),
    ]


def test_find_downstream_without_output_schema_loads_nothing(tmp_path: Path) -> None:
    registry = _registry(tmp_path)
    _add(registry, "@plain")
    _add(registry, "@other", input_schema=PERSON)
    source = registry.get("@plain")
    registry.gets.clear()

    assert find_downstream(registry, source) == []
    assert registry.gets == []


def test_find_downstream_skips_broken_agents(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    registry = _registry(tmp_path)
    _add(registry, "@src", output_schema=PERSON)
    _add(registry, "@ok", input_schema=NAME_ONLY)
    _add(registry, "@broken")
    (registry.context.paths.user_agents_dir / "@broken" / "config.json").write_text("{", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="ayo.chaining"):
        results = find_downstream(registry, registry.get("@src"))

    assert [item.handle for item in results] == ["@ok"]
    assert "@broken" in caplog.text


def test_find_upstream_excludes_target_and_agents_without_output(tmp_path: Path) -> None:
    registry = _registry(tmp_path)
    _add(registry, "@target", input_schema=NAME_ONLY, output_schema=NAME_ONLY)
    _add(registry, "@same", output_schema=NAME_ONLY)
    _add(registry, "@person", output_schema=PERSON)
    _add(registry, "@silent")
    _add(registry, "@wrong", output_schema=NEEDS_EMAIL)

    results = find_upstream(registry, registry.get("@target"))

    assert [(item.handle, item.compatibility) for item in results] == [
        ("@same", CompatibilityTier.EXACT),
        ("@person", CompatibilityTier.STRUCTURAL),
    ]


def test_find_upstream_for_freeform_target(tmp_path: Path) -> None:
    registry = _registry(tmp_path)
    _add(registry, "@target")
    _add(registry, "@b", output_schema=PERSON)
    _add(registry, "@a", output_schema=NAME_ONLY)

    results = find_upstream(registry, registry.get("@target"))

    assert [(item.handle, item.compatibility) for item in results] == [
        ("@a", CompatibilityTier.FREEFORM),
        ("@b", CompatibilityTier.FREEFORM),
    ]


def test_sort_chainable_orders_by_tier_then_handle() -> None:
    items = [
        ChainableAgent(_record("@b"), CompatibilityTier.FREEFORM),
        ChainableAgent(_record("@c"), CompatibilityTier.EXACT),
        ChainableAgent(_record("@a"), CompatibilityTier.FREEFORM),
    ]
    assert [item.handle for item in sort_chainable(items)] == ["@c", "@a", "@b"]


def test_list_chainable_filters_and_keeps_order() -> None:
    agents = [
        _record("@z", output_schema=PERSON),
        _record("@plain"),
        _record("@a", input_schema=NAME_ONLY),
    ]
    assert [agent.handle for agent in list_chainable(agents)] == ["@z", "@a"]
    assert not is_chainable(agents[1])


def test_load_chainable_uses_registry(tmp_path: Path) -> None:
    registry = _registry(tmp_path)
    _add(registry, "@with-output", output_schema=PERSON)
    _add(registry, "@plain")

    assert [agent.handle for agent in load_chainable(registry)] == ["@with-output"]
