"""CLI entrypoint."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

import yaml

from ayo import builtin
from ayo.directory_resolver import is_builtin_dir
from ayo.errors import AgentError, AyoError, PayloadValidationError
from ayo.models.agent_config import AgentConfig
from ayo.models.agent_record import AgentRecord
from ayo.models.chainable_agent import ChainableAgent
from ayo.models.schema import Schema, load_schema_file
from ayo.orchestrator import Orchestrator
from ayo.validation import expected_shape, generate_example, validate_input

logger = logging.getLogger(__name__)


def _print_json(value: Any) -> None:
    print(json.dumps(value, indent=2))


def _schema_summary(agent: AgentRecord) -> str:
    parts = []
    if agent.has_input_schema():
        parts.append("in")
    if agent.has_output_schema():
        parts.append("out")
    return "/".join(parts) or "-"


def _agent_dict(agent: AgentRecord) -> dict[str, Any]:
    return {
        "handle": agent.handle,
        "description": agent.description,
        "directory": str(agent.directory),
        "model": agent.model,
        "builtin": agent.builtin,
        "skills": [skill.name for skill in agent.skills],
        "input_schema": agent.input_schema.to_json_schema() if agent.input_schema else None,
        "output_schema": agent.output_schema.to_json_schema() if agent.output_schema else None,
    }


def _chainable_dict(item: ChainableAgent) -> dict[str, Any]:
    return {"handle": item.handle, "compatibility": str(item.compatibility), "description": item.agent.description}


def _print_chainable(items: list[ChainableAgent], as_json: bool, empty_message: str) -> None:
    if as_json:
        _print_json([_chainable_dict(item) for item in items])
        return
    if not items:
        print(empty_message)
        return
    width = max(len(item.handle) for item in items)
    for item in items:
        print(f"{item.handle:<{width}}  {str(item.compatibility):<10}  {item.agent.description}")


def cmd_agents_list(orch: Orchestrator, args: argparse.Namespace) -> int:
    rows = []
    for handle in orch.list_handles():
        try:
            agent = orch.load(handle)
        except AgentError as exc:
            logger.warning("Could not load %s: %s", handle, exc)
            rows.append({"handle": handle, "description": "", "error": str(exc)})
            continue
        rows.append({"handle": handle, "description": agent.description, "builtin": agent.builtin})
    if args.json:
        _print_json(rows)
        return 0
    for row in rows:
        note = f"(error: {row['error']})" if "error" in row else row["description"]
        print(f"{row['handle']}  {note}")
    return 0


def cmd_agents_show(orch: Orchestrator, args: argparse.Namespace) -> int:
    agent = orch.load(args.handle)
    if args.json:
        _print_json(_agent_dict(agent))
        return 0
    if args.system:
        print(agent.combined_system)
        return 0
    print(f"handle:      {agent.handle}")
    print(f"description: {agent.description}")
    print(f"directory:   {agent.directory}")
    print(f"model:       {agent.model}")
    print(f"builtin:     {'yes' if agent.builtin else 'no'}")
    print(f"schemas:     {_schema_summary(agent)}")
    if agent.skills:
        print(f"skills:      {', '.join(skill.name for skill in agent.skills)}")
    for warning in agent.skills_warnings:
        print(f"warning:     {warning}")
    return 0


def _read_schema_arg(raw: Optional[str]) -> Optional[Schema]:
    if not raw:
        return None
    path = Path(raw)
    schema = load_schema_file(path)
    if schema is None:
        raise AyoError(f"schema file not found: {path}")
    return schema


def cmd_agents_create(orch: Orchestrator, args: argparse.Namespace) -> int:
    if args.system_file:
        try:
            system_message = Path(args.system_file).read_text(encoding="utf-8")
        except OSError as exc:
            raise AyoError(f"read system file {args.system_file}: {exc}") from exc
    else:
        system_message = args.system
    try:
        config = AgentConfig(model=args.model, description=args.description, allowed_tools=args.tool)
        input_schema = _read_schema_arg(args.input_schema)
        output_schema = _read_schema_arg(args.output_schema)
    except ValueError as exc:
        raise AyoError(str(exc)) from exc
    agent = orch.create(args.handle, config, system_message, input_schema, output_schema)
    print(f"created {agent.handle} in {agent.directory}")
    return 0


def cmd_chain_ls(orch: Orchestrator, args: argparse.Namespace) -> int:
    agents = orch.chainable()
    if args.json:
        _print_json(
            [
                {
                    "handle": agent.handle,
                    "description": agent.description,
                    "input": agent.has_input_schema(),
                    "output": agent.has_output_schema(),
                }
                for agent in agents
            ]
        )
        return 0
    if not agents:
        print("No chainable agents found.")
        return 0
    for agent in agents:
        print(f"{agent.handle}  [{_schema_summary(agent)}]  {agent.description}")
    return 0


def cmd_chain_inspect(orch: Orchestrator, args: argparse.Namespace) -> int:
    agent = orch.load(args.handle)
    schemas = {
        "input": agent.input_schema.to_json_schema() if agent.input_schema else None,
        "output": agent.output_schema.to_json_schema() if agent.output_schema else None,
    }
    if args.json:
        _print_json({"handle": agent.handle, **schemas})
        return 0
    print(f"{agent.handle}")
    for label, schema in schemas.items():
        print(f"\n{label} schema:")
        if schema is None:
            print("  (none)")
        else:
            print(yaml.safe_dump(schema, sort_keys=False).rstrip())
    return 0


def cmd_chain_from(orch: Orchestrator, args: argparse.Namespace) -> int:
    handle = orch.load(args.handle).handle
    _print_chainable(orch.downstream(handle), args.json, f"No agents can consume output of {handle}.")
    return 0


def cmd_chain_to(orch: Orchestrator, args: argparse.Namespace) -> int:
    handle = orch.load(args.handle).handle
    _print_chainable(orch.upstream(handle), args.json, f"No agents produce input for {handle}.")
    return 0


def cmd_chain_validate(orch: Orchestrator, args: argparse.Namespace) -> int:
    agent = orch.load(args.handle)
    payload = sys.stdin.read() if args.payload == "-" else args.payload
    if not agent.has_input_schema():
        print(f"{agent.handle} accepts freeform input")
        return 0
    validate_input(agent, payload)
    print(f"valid input for {agent.handle}")
    return 0


def cmd_chain_example(orch: Orchestrator, args: argparse.Namespace) -> int:
    agent = orch.load(args.handle)
    if agent.input_schema is None:
        print(f"{agent.handle} accepts freeform input")
        return 0
    _print_json(generate_example(agent.input_schema))
    return 0


def _refuse_local_modifications(orch: Orchestrator) -> None:
    modified = builtin.check_modified_agents(orch.context.paths)
    if not modified:
        return
    lines = ["bundled agents have local modifications:"]
    lines.extend(f"  {agent.handle}: {', '.join(agent.modified_files)}" for agent in modified)
    lines.append(f"use --force to overwrite, or copy them to {orch.context.configured_agents_dir} first")
    raise AyoError("\n".join(lines))


def _install(orch: Orchestrator, *, force: bool) -> Path:
    try:
        return builtin.install_bundled_defaults(orch.context.paths, force=force)
    except OSError as exc:
        raise AyoError(f"install bundled agents: {exc}") from exc


def cmd_agents_update(orch: Orchestrator, args: argparse.Namespace) -> int:
    if not args.force:
        _refuse_local_modifications(orch)
    target = _install(orch, force=True)
    print(f"bundled agents updated in {target}")
    return 0


def cmd_agents_dir(orch: Orchestrator, args: argparse.Namespace) -> int:
    dirs = orch.registry.candidate_dirs()
    if args.json:
        _print_json([str(directory) for directory in dirs])
        return 0
    print("Agent directories, highest priority first:")
    for directory in dirs:
        marker = "  (bundled)" if is_builtin_dir(orch.context, directory) else ""
        print(f"  {directory}{marker}")
    return 0


def cmd_setup(orch: Orchestrator, args: argparse.Namespace) -> int:
    if not args.force and builtin.needs_install(orch.context.paths):
        _refuse_local_modifications(orch)
    target = _install(orch, force=args.force)
    print(f"bundled agents installed in {target}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ayo")
    parser.add_argument("--config", type=str, default=None, help="Path to config.yaml")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    agents = sub.add_parser("agents", help="Manage agents")
    agents_sub = agents.add_subparsers(dest="agents_command", required=True)
    p = agents_sub.add_parser("list", help="List known agents")
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_agents_list)
    p = agents_sub.add_parser("show", help="Show a resolved agent")
    p.add_argument("handle")
    p.add_argument("--json", action="store_true")
    p.add_argument("--system", action="store_true", help="Print the composed system prompt")
    p.set_defaults(func=cmd_agents_show)
    p = agents_sub.add_parser("create", help="Create a user agent")
    p.add_argument("handle")
    system_group = p.add_mutually_exclusive_group(required=True)
    system_group.add_argument("--system", type=str, help="System message text")
    system_group.add_argument("--system-file", type=str, help="Path to a system message file")
    p.add_argument("--model", type=str, default="")
    p.add_argument("--description", type=str, default="")
    p.add_argument("--tool", action="append", default=[], help="Allowed tool, repeatable")
    p.add_argument("--input-schema", type=str, default=None)
    p.add_argument("--output-schema", type=str, default=None)
    p.set_defaults(func=cmd_agents_create)
    p = agents_sub.add_parser("update", help="Reinstall bundled agents from the package")
    p.add_argument("--force", action="store_true", help="Overwrite local modifications")
    p.set_defaults(func=cmd_agents_update)
    p = agents_sub.add_parser("dir", help="Show agent directories in lookup order")
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_agents_dir)

    chain = sub.add_parser("chain", help="Inspect agent chaining")
    chain_sub = chain.add_subparsers(dest="chain_command", required=True)
    p = chain_sub.add_parser("ls", help="List agents with schemas")
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_chain_ls)
    p = chain_sub.add_parser("inspect", help="Show an agent's schemas")
    p.add_argument("handle")
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_chain_inspect)
    p = chain_sub.add_parser("from", help="Agents that can consume this agent's output")
    p.add_argument("handle")
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_chain_from)
    p = chain_sub.add_parser("to", help="Agents whose output this agent can consume")
    p.add_argument("handle")
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_chain_to)
    p = chain_sub.add_parser("validate", help="Validate a JSON payload against an agent's input schema")
    p.add_argument("handle")
    p.add_argument("payload", help="JSON text, or - to read stdin")
    p.set_defaults(func=cmd_chain_validate)
    p = chain_sub.add_parser("example", help="Print an example input for an agent")
    p.add_argument("handle")
    p.set_defaults(func=cmd_chain_example)

    p = sub.add_parser("setup", help="Install bundled agents and skills")
    p.add_argument("--force", action="store_true")
    p.set_defaults(func=cmd_setup)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        orch = Orchestrator.from_environment(Path(args.config).expanduser() if args.config else None)
        return args.func(orch, args)
    except PayloadValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        print(f"expected shape:\n{expected_shape(exc.schema)}", file=sys.stderr)
        return 1
    except (AyoError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
