import json
from pathlib import Path

from ayo.context import ResolutionContext
from ayo.models import AgentConfig
from ayo.models import CompatibilityTier
from ayo.models import Schema
from ayo.orchestrator import Orchestrator
from ayo.paths import AyoPaths


class InstallRecorder:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, paths: AyoPaths) -> Path:
        self.calls += 1
        return paths.builtin_agents_dir


def _orchestrator(tmp_path: Path) -> tuple[Orchestrator, InstallRecorder]:
    installer = InstallRecorder()
    context = ResolutionContext(paths=AyoPaths(home=tmp_path / "home", cwd=tmp_path / "project"))
    return Orchestrator(context, installer=installer), installer


def test_init_shares_context_with_registry(tmp_path: Path) -> None:
    orch, _ = _orchestrator(tmp_path)
    assert orch.registry.context is orch.context


def test_create_then_query_chain(tmp_path: Path) -> None:
    orch, installer = _orchestrator(tmp_path)
    text = Schema.model_validate({"type": "object", "properties": {"text": {"type": "string"}}, "required": ["text"]})

    orch.create("producer", AgentConfig(), "Produce text.", output_schema=text)
    orch.create("consumer", AgentConfig(), "Consume text.", input_schema=text)

    downstream = orch.downstream("producer")
    upstream = orch.upstream("@consumer")

    assert [(item.handle, item.compatibility) for item in downstream] == [("@consumer", CompatibilityTier.EXACT)]
    assert [item.handle for item in upstream] == ["@producer"]
    assert [agent.handle for agent in orch.chainable()] == ["@consumer", "@producer"]
    # Bundled handles were attempted but nothing was installed.
    assert installer.calls > 0


def test_load_reads_from_project_dir(tmp_path: Path) -> None:
    orch, _ = _orchestrator(tmp_path)
    agent_dir = tmp_path / "project" / ".config" / "ayo" / "agents" / "@local"
    agent_dir.mkdir(parents=True)
    (agent_dir / "system.md").write_text("Local agent.", encoding="utf-8")
    (agent_dir / "config.json").write_text(json.dumps({"model": "tiny"}), encoding="utf-8")

    record = orch.load("local")

    assert record.model == "tiny"
    assert "@local" in orch.list_handles()
