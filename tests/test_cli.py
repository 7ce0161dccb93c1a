from __future__ import annotations

import pytest
from typer.testing import CliRunner

from memvault.cli import app

runner = CliRunner()


@pytest.fixture
def root(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    storage_root = tmp_path / "memories"
    monkeypatch.setenv("MEMVAULT_ROOT", str(storage_root))
    return storage_root


def test_cli_create_view_and_delete(root) -> None:
    result = runner.invoke(app, ["create", "/memories/a.md", "--text", "hello"])
    assert result.exit_code == 0
    assert "Created: /memories/a.md" in result.output

    result = runner.invoke(app, ["view", "/memories/a.md"])
    assert result.exit_code == 0
    assert result.output.strip() == "hello"

    result = runner.invoke(app, ["delete", "/memories/a.md"])
    assert result.exit_code == 0
    assert not (root / "a.md").exists()


def test_cli_edit_commands(root) -> None:
    runner.invoke(app, ["create", "/memories/x.md", "--text", "a\nb"])
    result = runner.invoke(app, ["str-replace", "/memories/x.md", "b", "c"])
    assert result.exit_code == 0
    result = runner.invoke(app, ["insert", "/memories/x.md", "2", "NEW"])
    assert result.exit_code == 0
    assert (root / "x.md").read_text(encoding="utf-8") == "a\nNEW\nc"

    result = runner.invoke(app, ["view", "/memories/x.md", "--start", "2", "--end", "3"])
    assert result.output.strip() == "NEW\nc"

    result = runner.invoke(app, ["rename", "/memories/x.md", "/memories/y.md"])
    assert result.exit_code == 0
    assert (root / "y.md").exists()


def test_cli_reports_failures(root) -> None:
    result = runner.invoke(app, ["view", "/memories/missing.md"])
    assert result.exit_code == 1
    assert "not_found: Path does not exist: /memories/missing.md" in result.output


def test_cli_tools_list(root) -> None:
    result = runner.invoke(app, ["tools", "list"])
    assert result.exit_code == 0
    assert "memory (destructive)" in result.output


def test_cli_config_show(root) -> None:
    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    assert f"storage_root={root}" in result.output
