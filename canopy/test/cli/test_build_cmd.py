from __future__ import annotations

import json
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from canopy import __version__
from canopy.cli.context import CLIContext
from canopy.core.config import CONFIG_FILE
from canopy.core.errors import ErrorCode
from canopy.core.workspace import WORKSPACE_FILE
from canopy.net.http import HttpClient, MockHttpClient
from canopy.output.console import MockConsole
from canopy.site.assets import CSS_ENV_VAR


def _patch_context(monkeypatch: pytest.MonkeyPatch, root: Path) -> MockConsole:
    import canopy.cli.commands.build_cmd as build_cmd

    console = MockConsole()
    http = MockHttpClient()

    def fake_http(_self: CLIContext, _timeout: float) -> HttpClient:
        return http

    monkeypatch.setattr(CLIContext, "http", fake_http)
    monkeypatch.setattr(build_cmd, "build_context", lambda _root: CLIContext(root=root, console=console))
    monkeypatch.delenv(CSS_ENV_VAR, raising=False)
    return console


def test_build_single_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import canopy.cli.commands.build_cmd as build_cmd

    (tmp_path / "README.md").write_text("# Hello", encoding="utf-8")
    console = _patch_context(monkeypatch, tmp_path)

    build_cmd.build(root=tmp_path, json_only=False)

    assert (tmp_path / "public" / "index.html").is_file()
    assert not console.has_error()


def test_build_invalid_config_exits_with_user_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import canopy.cli.commands.build_cmd as build_cmd

    (tmp_path / CONFIG_FILE).write_text("{broken", encoding="utf-8")
    console = _patch_context(monkeypatch, tmp_path)

    with pytest.raises(typer.Exit) as exc:
        build_cmd.build(root=tmp_path, json_only=False)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert console.has_error()


def test_build_workspace_writes_index(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import canopy.cli.commands.build_cmd as build_cmd

    member = tmp_path / "cli"
    member.mkdir()
    (member / "README.md").write_text("# cli", encoding="utf-8")
    (tmp_path / WORKSPACE_FILE).write_text(
        json.dumps({"workspace": {"name": "suite", "members": [{"path": "cli"}]}}),
        encoding="utf-8",
    )
    _patch_context(monkeypatch, tmp_path)

    build_cmd.build(root=tmp_path, json_only=False)

    assert (tmp_path / "public" / "index.html").is_file()
    assert (tmp_path / "public" / "cli" / "index.html").is_file()


def test_version_flag() -> None:
    from canopy.cli.app import app

    result = CliRunner().invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output
