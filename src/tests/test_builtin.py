from pathlib import Path

from ayo import builtin
from ayo.models.agent_config import CONFIG_FILENAME
from ayo.paths import AyoPaths


def test_list_agents_reads_bundled_data() -> None:
    agents = builtin.list_agents()
    assert agents == sorted(agents)
    assert "@ayo" in agents
    assert builtin.has_agent("ayo")
    assert not builtin.has_agent("@nope")


def test_list_agent_infos_exposes_descriptions() -> None:
    infos = {info.handle: info for info in builtin.list_agent_infos()}
    assert infos["@ayo"].description
    assert infos["@ayo.summarize"].delegate_hint


def test_install_bundled_defaults_copies_and_marks_version(tmp_path: Path) -> None:
    paths = AyoPaths(home=tmp_path)
    assert builtin.needs_install(paths)

    target = builtin.install_bundled_defaults(paths)

    assert target == paths.builtin_agents_dir
    assert (target / "@ayo" / "system.md").is_file()
    assert (target / "@ayo.summarize" / "output.jsonschema").is_file()
    assert (paths.builtin_skills_dir / "agent-chaining" / "SKILL.md").is_file()
    assert paths.version_file.read_text(encoding="utf-8") == builtin.BUILTIN_VERSION
    assert not builtin.needs_install(paths)


def test_install_is_skipped_when_current_unless_forced(tmp_path: Path) -> None:
    paths = AyoPaths(home=tmp_path)
    builtin.install_bundled_defaults(paths)
    config_path = paths.builtin_agents_dir / "@ayo" / CONFIG_FILENAME
    config_path.write_text("{}", encoding="utf-8")

    builtin.install_bundled_defaults(paths)
    assert config_path.read_text(encoding="utf-8") == "{}"

    builtin.install_bundled_defaults(paths, force=True)
    assert config_path.read_text(encoding="utf-8") != "{}"


def test_stale_version_marker_triggers_install(tmp_path: Path) -> None:
    paths = AyoPaths(home=tmp_path)
    paths.version_file.parent.mkdir(parents=True)
    paths.version_file.write_text("0", encoding="utf-8")
    assert builtin.needs_install(paths)


def test_fresh_install_has_no_modified_agents(tmp_path: Path) -> None:
    paths = AyoPaths(home=tmp_path)
    assert builtin.check_modified_agents(paths) == []

    builtin.install_bundled_defaults(paths)

    assert builtin.check_modified_agents(paths) == []


def test_check_modified_agents_reports_edits(tmp_path: Path) -> None:
    paths = AyoPaths(home=tmp_path)
    builtin.install_bundled_defaults(paths)
    installed = paths.builtin_agents_dir
    (installed / "@ayo" / "system.md").write_text("My own prompt.", encoding="utf-8")
    (installed / "@ayo" / "notes.md").write_text("scratch", encoding="utf-8")
    (installed / "@ayo.summarize" / "output.jsonschema").unlink()

    modified = {agent.handle: agent for agent in builtin.check_modified_agents(paths)}

    assert set(modified) == {"@ayo", "@ayo.summarize"}
    assert modified["@ayo"].modified_files == ("system.md", "notes.md (added)")
    assert modified["@ayo"].installed_dir == installed / "@ayo"
    assert modified["@ayo.summarize"].modified_files == ("output.jsonschema (deleted)",)


def test_forced_install_restores_edited_files(tmp_path: Path) -> None:
    paths = AyoPaths(home=tmp_path)
    builtin.install_bundled_defaults(paths)
    (paths.builtin_agents_dir / "@ayo" / "system.md").write_text("My own prompt.", encoding="utf-8")

    builtin.install_bundled_defaults(paths, force=True)

    assert builtin.check_modified_agents(paths) == []
