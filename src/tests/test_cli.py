import json
from pathlib import Path
from typing import Any

import pytest

from ayo.cli import main

INPUT = {"type": "object", "properties": {"text": {"type": "string"}}, "required": ["text"]}
OUTPUT = {"type": "object", "properties": {"text": {"type": "string"}, "words": {"type": "integer"}}, "required": ["text"]}


def _workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(project)
    return home / ".config" / "ayo" / "agents"


def _add(agents_dir: Path, handle: str, input_schema: Any = None, output_schema: Any = None) -> None:
    agent_dir = agents_dir / handle
    agent_dir.mkdir(parents=True)
    (agent_dir / "system.md").write_text(f"I am {handle}.", encoding="utf-8")
    (agent_dir / "config.json").write_text(json.dumps({"description": f"{handle} agent"}), encoding="utf-8")
    if input_schema is not None:
        (agent_dir / "input.jsonschema").write_text(json.dumps(input_schema), encoding="utf-8")
    if output_schema is not None:
        (agent_dir / "output.jsonschema").write_text(json.dumps(output_schema), encoding="utf-8")


def test_agents_show_prints_details(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    agents_dir = _workspace(tmp_path, monkeypatch)
    _add(agents_dir, "@reader", input_schema=INPUT)

    assert main(["agents", "show", "reader", "--json"]) == 0

    shown = json.loads(capsys.readouterr().out)
    assert shown["handle"] == "@reader"
    assert shown["description"] == "@reader agent"
    assert shown["input_schema"]["required"] == ["text"]
    assert shown["output_schema"] is None


def test_unknown_agent_reports_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path, monkeypatch)

    assert main(["agents", "show", "@nope"]) == 1

    assert capsys.readouterr().err.strip() == "error: agent not found: @nope"


def test_agents_create_and_reserved_namespace(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    agents_dir = _workspace(tmp_path, monkeypatch)

    assert main(["agents", "create", "notes", "--system", "Take notes.", "--description", "Notes"]) == 0
    assert "created @notes" in capsys.readouterr().out
    assert (agents_dir / "@notes" / "system.md").is_file()

    assert main(["agents", "create", "@ayo.mine", "--system", "x"]) == 1
    assert "reserved" in capsys.readouterr().err
    assert not (agents_dir / "@ayo.mine").exists()


def test_chain_from_lists_downstream_agents(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    agents_dir = _workspace(tmp_path, monkeypatch)
    _add(agents_dir, "@counter", output_schema=OUTPUT)
    _add(agents_dir, "@reader", input_schema=INPUT)

    assert main(["chain", "from", "@counter", "--json"]) == 0

    results = json.loads(capsys.readouterr().out)
    assert results[0] == {"handle": "@reader", "compatibility": "structural", "description": "@reader agent"}
    assert all(item["compatibility"] == "freeform" for item in results[1:])
    assert "@counter" not in [item["handle"] for item in results]


def test_chain_to_and_ls(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    agents_dir = _workspace(tmp_path, monkeypatch)
    _add(agents_dir, "@counter", output_schema=OUTPUT)
    _add(agents_dir, "@reader", input_schema=INPUT)

    assert main(["chain", "to", "@reader", "--json"]) == 0
    upstream = json.loads(capsys.readouterr().out)
    assert [item["handle"] for item in upstream] == ["@counter"]

    assert main(["chain", "ls", "--json"]) == 0
    listed = {item["handle"]: item for item in json.loads(capsys.readouterr().out)}
    assert listed["@counter"]["output"] is True
    assert listed["@reader"]["input"] is True
    assert "@ayo" not in listed


def test_chain_validate_and_example(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    agents_dir = _workspace(tmp_path, monkeypatch)
    _add(agents_dir, "@reader", input_schema=INPUT)

    assert main(["chain", "validate", "@reader", '{"text": "hello"}']) == 0
    assert "valid input for @reader" in capsys.readouterr().out

    assert main(["chain", "validate", "@reader", '{"words": 3}']) == 1
    err = capsys.readouterr().err
    assert err.startswith("error: input validation failed")
    assert "expected shape" in err

    assert main(["chain", "example", "@reader"]) == 0
    assert json.loads(capsys.readouterr().out) == {"text": "example"}


def test_chain_inspect_prints_yaml(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    agents_dir = _workspace(tmp_path, monkeypatch)
    _add(agents_dir, "@reader", input_schema=INPUT)

    assert main(["chain", "inspect", "@reader"]) == 0

    out = capsys.readouterr().out
    assert "input schema:" in out
    assert "required:\n- text" in out
    assert "output schema:\n  (none)" in out


def test_setup_installs_bundled_agents(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path, monkeypatch)

    assert main(["setup"]) == 0

    assert "bundled agents installed" in capsys.readouterr().out
    assert (tmp_path / "home" / ".local" / "share" / "ayo" / "agents" / "@ayo" / "system.md").is_file()


def test_bad_config_file_reports_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path, monkeypatch)
    config = tmp_path / "bad.yaml"
    config.write_text("agent_dir: typo\n", encoding="utf-8")

    assert main(["--config", str(config), "agents", "list"]) == 1
    assert capsys.readouterr().err.startswith("error: parse config")


def test_agents_list_includes_user_and_bundled_agents(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    agents_dir = _workspace(tmp_path, monkeypatch)
    _add(agents_dir, "@reader")

    assert main(["agents", "list", "--json"]) == 0

    rows = {row["handle"]: row for row in json.loads(capsys.readouterr().out)}
    assert rows["@reader"]["description"] == "@reader agent"
    assert rows["@ayo"]["builtin"] is True


def _installed_system(tmp_path: Path) -> Path:
    return tmp_path / "home" / ".local" / "share" / "ayo" / "agents" / "@ayo" / "system.md"


def test_agents_update_refuses_local_modifications_unless_forced(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path, monkeypatch)
    assert main(["setup"]) == 0
    system = _installed_system(tmp_path)
    system.write_text("My own prompt.", encoding="utf-8")
    capsys.readouterr()

    assert main(["agents", "update"]) == 1

    err = capsys.readouterr().err
    assert "local modifications" in err
    assert "@ayo: system.md" in err
    assert system.read_text(encoding="utf-8") == "My own prompt."

    assert main(["agents", "update", "--force"]) == 0

    assert "bundled agents updated" in capsys.readouterr().out
    assert system.read_text(encoding="utf-8") != "My own prompt."


def test_agents_update_without_modifications(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path, monkeypatch)

    assert main(["agents", "update"]) == 0

    assert "bundled agents updated" in capsys.readouterr().out
    assert _installed_system(tmp_path).is_file()


def test_setup_after_version_bump_refuses_local_modifications(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path, monkeypatch)
    assert main(["setup"]) == 0
    system = _installed_system(tmp_path)
    system.write_text("My own prompt.", encoding="utf-8")
    (tmp_path / "home" / ".local" / "share" / "ayo" / ".builtin-version").write_text("0", encoding="utf-8")
    capsys.readouterr()

    assert main(["setup"]) == 1

    assert "local modifications" in capsys.readouterr().err
    assert system.read_text(encoding="utf-8") == "My own prompt."


def test_agents_dir_lists_lookup_order(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    agents_dir = _workspace(tmp_path, monkeypatch)
    home = tmp_path / "home"
    project = tmp_path / "project"

    assert main(["agents", "dir", "--json"]) == 0

    listed = [Path(entry) for entry in json.loads(capsys.readouterr().out)]
    assert listed == [
        (project / ".config" / "ayo" / "agents").resolve(),
        (project / ".local" / "share" / "ayo" / "agents").resolve(),
        agents_dir.resolve(),
        (home / ".local" / "share" / "ayo" / "agents").resolve(),
    ]

    assert main(["agents", "dir"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Agent directories, highest priority first:"
    assert lines[-1].endswith("(bundled)")
    assert "(bundled)" not in "\n".join(lines[1:-1])
