"""Tool usage instructions for the system prompt."""

from __future__ import annotations

from typing import Sequence

from ayo.builtin import BuiltinAgentInfo
from ayo.plugins import PluginAgentInfo

DEFAULT_TOOLS = ("bash", "agent_call")

_BASH_SECTION = """<bash>
You have a bash tool for executing shell commands on the local system.

Only use bash when the request needs local system interaction (files, processes, installations).
Do not make gratuitous calls such as `ls` or `echo` that do not serve the request.
Never call `date` or similar: the current datetime is already in your environment block.

When bash is needed, run the command yourself and report the results, not instructions.

Required parameters:
- `command`: The shell command
- `description`: What you're doing (shown in UI)

Optional: `timeout_seconds`, `working_dir`
</bash>"""

_MEMORY_SECTION = """<memory>
You have a memory tool for persistent memories across sessions.

Store a memory when the user states a preference, corrects you, shares a fact about
themselves or their project, or asks you to remember something.
Search memories before starting work that may depend on past context.

Operations:
- `search`: query (required), limit (optional)
- `store`: content (required), category (optional)
- `list`: limit (optional)
- `forget`: id (required)
</memory>"""

_SEARCH_SECTION = """<search>
You have a search tool for searching the web.

Use it for current events, facts that may have changed since training, or when the user asks you to search.

Parameters:
- `query` (required): Search terms
- `categories` (optional): general, news, science, it, files
- `time_range` (optional): day, week, month, year
- `language` (optional): Language code like 'en'

Summarize findings and cite sources.
</search>"""


def _agent_call_section(
    available_agents: Sequence[BuiltinAgentInfo],
    plugin_agents: Sequence[PluginAgentInfo],
) -> str:
    lines = ["<agent_call>", "You have access to specialized agents via the agent_call tool.", ""]
    if available_agents:
        lines.extend(["Available builtin agents:", ""])
        for info in available_agents:
            lines.append(f"### {info.handle}")
            if info.description:
                lines.append(info.description)
            if info.delegate_hint:
                lines.append(f"**When to use**: {info.delegate_hint}")
            lines.append("")
    if plugin_agents:
        lines.extend(["Available plugin agents:", ""])
        for plugin_info in plugin_agents:
            lines.append(f"### {plugin_info.handle}")
            lines.append(f"(from plugin: {plugin_info.plugin_name})")
            lines.append("")
    lines.extend(
        [
            "The called agent runs as a subprocess and returns its complete response.",
            "",
            "Required parameters:",
            "- `agent`: The agent handle (e.g., '@ayo')",
            "- `prompt`: The prompt to send to the agent",
            "",
            "Optional: `timeout_seconds` (default 120, max 300)",
            "</agent_call>",
        ]
    )
    return "\n".join(lines)


def build_tools_prompt(
    allowed_tools: Sequence[str],
    *,
    available_agents: Sequence[BuiltinAgentInfo] = (),
    plugin_agents: Sequence[PluginAgentInfo] = (),
    search_available: bool = False,
) -> str:
    """
    Returns the <tools> block for the allowed tools, or "" when none apply.
    An empty allow-list means the default set.
    """
    tools = set(allowed_tools or DEFAULT_TOOLS)
    sections: list[str] = []
    if "bash" in tools:
        sections.append(_BASH_SECTION)
    # agent_call is only useful when there is someone to call.
    if "agent_call" in tools and (available_agents or plugin_agents):
        sections.append(_agent_call_section(available_agents, plugin_agents))
    if "memory" in tools:
        sections.append(_MEMORY_SECTION)
    if "search" in tools and search_available:
        sections.append(_SEARCH_SECTION)
    if not sections:
        return ""
    return "<tools>\n\n" + "\n\n".join(sections) + "\n\n</tools>"
