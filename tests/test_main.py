import json
from pathlib import Path

import pytest

from tern.__main__ import main, resolve_config
from tern.config import TernConfig
from tern.parsers import get_arg_parsers
from tern.shell import Shell


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Run every test from an empty directory with an empty home."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.delenv("TERN_CONFIG", raising=False)
    monkeypatch.setenv("TERN_LOG_MODE", "cli")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_parsers():
    parsers = get_arg_parsers()
    args = parsers.parse_args(
        ["--spec-dir", "a", "--spec-dir", "b", "complete", "git ", "--shell", "pwsh"]
    )
    assert args.command == "complete"
    assert args.spec_dirs == [Path("a"), Path("b")]
    assert args.shell is Shell.PWSH


def test_resolve_config_defaults():
    config, path = resolve_config(None)
    assert config == TernConfig()
    assert path is None


def test_complete_json(capsys, isolated):
    assert main(["complete", "git che", "--json", "--cwd", str(isolated)]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output["characters_to_drop"] == 3
    assert [s["display"] for s in output["suggestions"]] == [
        "checkout",
        "cherry",
        "cherry-pick",
    ]
    assert output["suggestions"][0]["kind"] == "subcommand"


def test_complete_no_result(capsys):
    assert main(["complete", "zzz qq", "--json"]) == 1
    assert capsys.readouterr().out.strip() == "null"


def test_complete_table(capsys):
    assert main(["complete", "git comm"]) == 0
    output = capsys.readouterr().out
    assert "commit" in output
    assert "characters to drop: 4" in output


def test_list(capsys):
    assert main(["list", "g"]) == 0
    assert capsys.readouterr().out.split() == ["git"]


def test_extra_spec_dir(capsys, isolated):
    specs = isolated / "specs"
    specs.mkdir()
    (specs / "tool.yaml").write_text("name: tool\nsubcommands:\n  - name: run\n")
    assert main(["--spec-dir", str(specs), "complete", "tool ", "--json"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert [s["display"] for s in output["suggestions"]] == ["run"]


def test_config_file_spec_dirs(capsys, isolated):
    (isolated / "specs").mkdir()
    (isolated / "specs" / "tool.yaml").write_text("name: tool\n")
    (isolated / "tern.yaml").write_text("spec_dirs: specs\ninclude_bundled: false\n")
    assert main(["list"]) == 0
    assert capsys.readouterr().out.split() == ["tool"]


def test_bad_config(capsys, isolated):
    (isolated / "tern.yaml").write_text("probe_timeout: 0\n")
    assert main(["list"]) == 2
    assert main(["--config", "missing.yaml", "list"]) == 2
