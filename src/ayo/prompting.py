"""System prompt composition."""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional

from ayo.models.agent_config import AgentConfig

ENVIRONMENT_START = "<environment>"
ENVIRONMENT_END = "</environment>"
GUARDRAILS_START = "<guardrails>"
GUARDRAILS_END = "</guardrails>"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S %Z"

GUARDRAILS_PROMPT = f"""{GUARDRAILS_START}
- No malicious code: never write, run or explain how to deploy malware, exploits or code meant to cause harm.
- No destructive actions without confirmation: ask before deleting data, rewriting history or changing system configuration.
- No secrets in output: never print credentials, tokens or private keys you come across.
- Stay in scope: only touch files and systems the user's request requires.
- Be honest about results: report failures and partial work plainly.
{GUARDRAILS_END}"""


@dataclass(frozen=True)
class PromptFragments:
    system: str
    prefix: str = ""
    suffix: str = ""
    shared_system: str = ""


def build_environment_block(
    *,
    cwd: Optional[Path] = None,
    home: Optional[Path] = None,
    now: Optional[datetime] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Describes the runtime environment. Always placed first so the model knows
    the current time and platform before anything else.
    """
    moment = now or datetime.now().astimezone()
    env = os.environ if environ is None else environ
    lines = [
        ENVIRONMENT_START,
        f"datetime: {moment.strftime(DATETIME_FORMAT).strip()}",
        f"os: {platform.system().lower()}",
        f"arch: {platform.machine().lower()}",
    ]
    if cwd is not None:
        lines.append(f"cwd: {cwd}")
    shell = env.get("SHELL", "")
    if shell:
        lines.append(f"shell: {shell}")
    if home is not None:
        lines.append(f"home: {home}")
    lines.append(ENVIRONMENT_END)
    return "\n".join(lines)


def compose_system_prompt(
    handle: str,
    config: AgentConfig,
    fragments: PromptFragments,
    *,
    environment: Optional[str] = None,
) -> str:
    """
    Joins, in order: environment, prefix, shared system message, agent system,
    suffix, guardrails. Empty parts are dropped; prefix and suffix are dropped
    entirely when the agent disables wrapping.
    """
    parts = [environment if environment is not None else build_environment_block()]
    if not config.no_system_wrapper:
        parts.append(fragments.prefix)
    if not config.ignore_shared_system_message:
        parts.append(fragments.shared_system)
    parts.append(fragments.system)
    if not config.no_system_wrapper:
        parts.append(fragments.suffix)
    if config.guardrails_enabled(handle):
        parts.append(GUARDRAILS_PROMPT)
    return "\n\n".join(part.strip() for part in parts if part and part.strip()).strip()
