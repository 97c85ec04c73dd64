"""Skill discovery and the skills prompt fragment."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence
from xml.sax.saxutils import escape

import frontmatter
import yaml

from ayo.models.skill_metadata import DiscoveryResult, SkillFilter, SkillMetadata, SkillSource

logger = logging.getLogger(__name__)

SKILL_FILENAME = "SKILL.md"
NAME_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
MAX_NAME_LENGTH = 64
MAX_DESCRIPTION_LENGTH = 1024
MAX_COMPATIBILITY_LENGTH = 500

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


class SkillParseError(ValueError):
    pass


@dataclass(frozen=True)
class SkillSourceDir:
    path: Path
    source: SkillSource
    label: str


def parse_skill(text: str, dir_name: str) -> tuple[SkillMetadata, str]:
    """Parses SKILL.md text into metadata and body. The name must match the directory."""
    if not frontmatter.checks(text):
        raise SkillParseError("missing frontmatter")
    try:
        post = frontmatter.loads(text)
    except (yaml.YAMLError, TypeError, ValueError) as exc:
        raise SkillParseError(f"invalid frontmatter: {exc}") from exc
    raw = post.metadata

    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        raise SkillParseError("missing name")
    if len(name) > MAX_NAME_LENGTH or not NAME_RE.match(name):
        raise SkillParseError(f"invalid name {name!r}")
    if name != dir_name:
        raise SkillParseError(f"name must match directory {dir_name}")

    description = raw.get("description")
    if not isinstance(description, str) or not description.strip():
        raise SkillParseError("missing description")
    description = description.strip()
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise SkillParseError("description too long")

    compatibility = raw.get("compatibility")
    extra = raw.get("metadata")
    meta = SkillMetadata(
        name=name,
        description=description,
        license=str(raw.get("license", "")).strip(),
        compatibility=(
            compatibility.strip()
            if isinstance(compatibility, str) and len(compatibility.strip()) <= MAX_COMPATIBILITY_LENGTH
            else ""
        ),
        allowed_tools=str(raw.get("allowed-tools", "")).strip(),
        metadata={str(k): str(v) for k, v in extra.items()} if isinstance(extra, dict) else {},
    )
    return meta, post.content.strip()


def discover_with_sources(sources: Iterable[SkillSourceDir]) -> DiscoveryResult:
    """Scans directories in priority order; earlier sources win on name clashes."""
    found: dict[str, SkillMetadata] = {}
    warnings: list[str] = []

    for src in sources:
        if not src.path.is_dir():
            continue
        try:
            entries = sorted(src.path.iterdir())
        except OSError as exc:
            warnings.append(f"{src.path}: cannot list {src.label} skills: {exc}")
            continue
        for entry in entries:
            if not entry.is_dir():
                continue
            skill_path = entry / SKILL_FILENAME
            if not skill_path.is_file():
                warnings.append(f"{entry}: missing {SKILL_FILENAME}")
                continue
            try:
                text = skill_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                warnings.append(f"{skill_path}: unreadable: {exc}")
                continue
            try:
                meta, _body = parse_skill(text, entry.name)
            except SkillParseError as exc:
                warnings.append(f"{skill_path}: {exc}")
                continue
            if meta.name in found:
                warnings.append(f"duplicate skill {meta.name} from {src.label} ignored")
                continue
            found[meta.name] = meta.model_copy(
                update={
                    "path": str(skill_path.resolve()),
                    "source": src.source,
                    "has_scripts": (entry / "scripts").is_dir(),
                    "has_references": (entry / "references").is_dir(),
                    "has_assets": (entry / "assets").is_dir(),
                }
            )

    for warning in warnings:
        logger.warning("Skill discovery: %s", warning)
    return DiscoveryResult(skills=list(found.values()), warnings=warnings)


def filter_skills(skills: Iterable[SkillMetadata], include: Sequence[str], exclude: Sequence[str]) -> list[SkillMetadata]:
    include_set = set(include)
    exclude_set = set(exclude)
    out: list[SkillMetadata] = []
    for skill in skills:
        if skill.name in exclude_set:
            continue
        if include_set and skill.name not in include_set:
            continue
        out.append(skill)
    return out


def discover_skills(
    agent_skills_dir: Optional[Path],
    shared_dirs: Sequence[Path],
    skill_filter: SkillFilter,
    *,
    builtin_dir: Optional[Path] = None,
    plugin_dirs: Sequence[Path] = (),
) -> DiscoveryResult:
    """
    Priority: agent-specific > shared dirs (in order) > built-in > plugins.
    The result is filtered and sorted by name.
    """
    sources: list[SkillSourceDir] = []
    if agent_skills_dir is not None:
        sources.append(SkillSourceDir(agent_skills_dir, SkillSource.AGENT, "agent"))
    if not skill_filter.ignore_shared:
        sources.extend(SkillSourceDir(d, SkillSource.SHARED, "shared") for d in shared_dirs)
    if builtin_dir is not None and not skill_filter.ignore_builtin:
        sources.append(SkillSourceDir(builtin_dir, SkillSource.BUILTIN, "builtin"))
    sources.extend(SkillSourceDir(d, SkillSource.PLUGIN, "plugin") for d in plugin_dirs)

    result = discover_with_sources(sources)
    skills = filter_skills(result.skills, skill_filter.include, skill_filter.exclude)
    skills.sort(key=lambda skill: skill.name)
    return DiscoveryResult(skills=skills, warnings=result.warnings)


def _xml(text: str) -> str:
    return escape(text, _XML_ENTITIES)


def build_skills_prompt(skills: Sequence[SkillMetadata]) -> str:
    if not skills:
        return ""
    lines = [
        "<available_skills>",
        "When a user's request matches a skill's description, read the skill file to get detailed instructions.",
        "Use: cat <location> to read the full skill instructions.",
        "",
    ]
    for skill in sorted(skills, key=lambda s: s.name):
        lines.append("  <skill>")
        lines.append(f"    <name>{_xml(skill.name)}</name>")
        lines.append(f"    <description>{_xml(skill.description)}</description>")
        if skill.path:
            lines.append(f"    <location>{_xml(skill.path)}</location>")
        resources = [
            label
            for label, present in (
                ("scripts/", skill.has_scripts),
                ("references/", skill.has_references),
                ("assets/", skill.has_assets),
            )
            if present
        ]
        if resources:
            lines.append(f"    <resources>{_xml(', '.join(resources))}</resources>")
        lines.append("  </skill>")
    lines.append("</available_skills>")
    return "\n".join(lines)
