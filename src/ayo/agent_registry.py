"""Agent registry: resolves handles to fully loaded agents."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Optional

from ayo import builtin
from ayo.context import ResolutionContext
from ayo.delegates import build_delegates_prompt, merge_delegates
from ayo.directory_resolver import is_builtin_dir, resolve_agent_dirs
from ayo.errors import AgentLoadError, AgentNotFoundError, BundledInstallError, ReservedNamespaceError
from ayo.handles import HANDLE_SIGIL, is_reserved_namespace, normalize_handle
from ayo.io_utils import read_optional_text, resolve_relative, write_text
from ayo.models.agent_config import CONFIG_FILENAME, AgentConfig, load_agent_config
from ayo.models.agent_record import AgentRecord
from ayo.models.schema import Schema, load_schema_file
from ayo.models.skill_metadata import SkillFilter
from ayo.paths import AyoPaths
from ayo.plugins import list_plugin_agents, plugin_provides_tool
from ayo.prompting import PromptFragments, build_environment_block, compose_system_prompt
from ayo.skills import build_skills_prompt, discover_skills
from ayo.tools_prompt import build_tools_prompt

logger = logging.getLogger(__name__)

SYSTEM_FILENAME = "system.md"
INPUT_SCHEMA_FILENAME = "input.jsonschema"
OUTPUT_SCHEMA_FILENAME = "output.jsonschema"
SKILLS_DIRNAME = "skills"

PREFIX_PROMPT_NAME = "system-prefix.md"
SUFFIX_PROMPT_NAME = "system-suffix.md"
SHARED_PROMPT_NAME = "shared-system.md"

Installer = Callable[[AyoPaths], Path]


class AgentRegistry:
    def __init__(self, context: ResolutionContext, *, installer: Optional[Installer] = None) -> None:
        self.context = context
        self._installer: Installer = installer or builtin.install_bundled_defaults

    def candidate_dirs(self) -> list[Path]:
        return resolve_agent_dirs(self.context)

    def list_handles(self) -> list[str]:
        """Every handle known locally or bundled, sorted."""
        handles = set(builtin.list_agents())
        for base in self.candidate_dirs():
            if not base.is_dir():
                continue
            for entry in base.iterdir():
                if entry.is_dir() and entry.name.startswith(HANDLE_SIGIL):
                    handles.add(entry.name)
        return sorted(handles)

    def get(self, handle: str) -> AgentRecord:
        handle = normalize_handle(handle)
        for base in self.candidate_dirs():
            record = self._load_from_dir(base, handle)
            if record is not None:
                return record

        if not builtin.has_agent(handle):
            raise AgentNotFoundError(handle)

        paths = self.context.paths
        logger.info("Agent %s not installed yet, installing bundled defaults", handle)
        try:
            self._installer(paths)
        except OSError as exc:
            raise BundledInstallError(f"install bundled agents: {exc}") from exc
        record = self._load_from_dir(paths.builtin_agents_dir, handle)
        if record is None:
            raise AgentNotFoundError(handle)
        return record

    def _load_from_dir(self, base: Path, handle: str) -> AgentRecord | None:
        """None means the agent is not here; anything else wrong with it is a hard error."""
        agent_dir = base / handle
        if not agent_dir.is_dir():
            return None
        logger.debug("Loading %s from %s", handle, agent_dir)
        try:
            return self._build_record(handle, agent_dir, is_builtin=is_builtin_dir(self.context, base))
        except (OSError, ValueError) as exc:
            raise AgentLoadError(handle, agent_dir, exc) from exc

    def _fragment(self, configured: Optional[str], name: str) -> str:
        if configured:
            return read_optional_text(Path(configured).expanduser())
        return read_optional_text(self.context.paths.find_prompt_file(name))

    def _fragments(self, config: AgentConfig, system: str) -> PromptFragments:
        if config.no_system_wrapper:
            return PromptFragments(system=system)
        cli_config = self.context.config
        shared = ""
        if not config.ignore_shared_system_message:
            shared = self._fragment(cli_config.shared_system_message, SHARED_PROMPT_NAME)
        return PromptFragments(
            system=system,
            prefix=self._fragment(cli_config.system_prefix, PREFIX_PROMPT_NAME),
            suffix=self._fragment(cli_config.system_suffix, SUFFIX_PROMPT_NAME),
            shared_system=shared,
        )

    def _tools_prompt(self, handle: str, config: AgentConfig) -> str:
        plugins = self.context.plugins
        search_tool = self.context.config.default_tools.get("search", "")
        allowed = config.allowed_tools
        search_available = (
            "search" in allowed and bool(search_tool) and plugin_provides_tool(plugins, search_tool)
        )
        others = [info for info in builtin.list_agent_infos() if info.handle != handle]
        return build_tools_prompt(
            allowed,
            available_agents=others,
            plugin_agents=list_plugin_agents(plugins),
            search_available=search_available,
        )

    def _build_record(self, handle: str, agent_dir: Path, *, is_builtin: bool) -> AgentRecord:
        paths = self.context.paths
        config = load_agent_config(agent_dir)

        if config.system_file:
            system_path = resolve_relative(agent_dir, config.system_file)
        else:
            system_path = agent_dir / SYSTEM_FILENAME
        system = system_path.read_text(encoding="utf-8").strip()

        combined = compose_system_prompt(
            handle,
            config,
            self._fragments(config, system),
            environment=build_environment_block(cwd=paths.cwd, home=paths.home),
        )

        skill_filter = SkillFilter(
            include=config.skills,
            exclude=config.exclude_skills,
            ignore_builtin=config.ignore_builtin_skills,
            ignore_shared=config.ignore_shared_skills,
        )
        discovered = discover_skills(
            agent_dir / SKILLS_DIRNAME,
            self.context.shared_skills_dirs(),
            skill_filter,
            builtin_dir=paths.builtin_skills_dir,
            plugin_dirs=self.context.plugin_skills_dirs(),
        )

        return AgentRecord(
            handle=handle,
            directory=agent_dir,
            model=config.model or self.context.config.default_model,
            system=system,
            combined_system=combined,
            config=config,
            builtin=is_builtin,
            skills=tuple(discovered.skills),
            skills_warnings=tuple(discovered.warnings),
            skills_prompt=build_skills_prompt(discovered.skills),
            tools_prompt=self._tools_prompt(handle, config),
            delegates_prompt=build_delegates_prompt(merge_delegates(config.delegates, self.context)),
            input_schema=load_schema_file(agent_dir / INPUT_SCHEMA_FILENAME),
            output_schema=load_schema_file(agent_dir / OUTPUT_SCHEMA_FILENAME),
        )

    def save(
        self,
        handle: str,
        config: AgentConfig,
        system_message: str,
        input_schema: Optional[Schema] = None,
        output_schema: Optional[Schema] = None,
    ) -> AgentRecord:
        """Writes a user agent into the configured agents dir and loads it back."""
        handle = normalize_handle(handle)
        if is_reserved_namespace(handle):
            raise ReservedNamespaceError(handle)

        agent_dir = self.context.configured_agents_dir / handle
        write_text(agent_dir / CONFIG_FILENAME, config.model_dump_json(indent=2, exclude_defaults=True) + "\n")
        system_path = resolve_relative(agent_dir, config.system_file) if config.system_file else agent_dir / SYSTEM_FILENAME
        write_text(system_path, system_message.strip() + "\n")
        for filename, schema in ((INPUT_SCHEMA_FILENAME, input_schema), (OUTPUT_SCHEMA_FILENAME, output_schema)):
            if schema is None:
                (agent_dir / filename).unlink(missing_ok=True)
            else:
                write_text(agent_dir / filename, json.dumps(schema.to_json_schema(), indent=2) + "\n")
        logger.info("Saved agent %s to %s", handle, agent_dir)
        return self.get(handle)
