"""
Tests for the click command line.
"""

from __future__ import annotations

import logging

import httpx
import yaml
from click.testing import CliRunner

from postboard.backend.cli import main as cli_main
from postboard.backend.cli.check_deps import PACKAGES, missing_packages

from tests.fakes import build_post


class TestCli:
    def test_check_deps(self) -> None:
        assert missing_packages() == []
        result = CliRunner().invoke(cli_main.cli, ["check-deps"])
        assert result.exit_code == 0
        assert "All dependencies present" in result.output
        assert "PyJWT" in PACKAGES.values()

    def test_posts_prints_table(self, monkeypatch) -> None:
        async def fake_list(url: str):
            return [build_post(title="Hello", author_name="Ada")]

        monkeypatch.setattr(cli_main, "_list_posts", fake_list)
        result = CliRunner().invoke(cli_main.cli, ["posts"])
        assert result.exit_code == 0

    def test_post_reports_created(self, monkeypatch) -> None:
        calls = []

        async def fake_create(url: str, title: str, body: str, name):
            calls.append((url, title, body, name))
            return build_post(title=title, body=body, author_name=name or "Demo User", post_id="abc")

        monkeypatch.setattr(cli_main, "_create_post", fake_create)
        result = CliRunner().invoke(
            cli_main.cli, ["post", "--title", "Hello", "--body", "World", "--as", "Ada"]
        )
        assert result.exit_code == 0
        assert calls == [("http://127.0.0.1:8000", "Hello", "World", "Ada")]

    def test_connection_error_exits_1(self, monkeypatch) -> None:
        async def failing(url: str):
            raise httpx.ConnectError("refused")

        monkeypatch.setattr(cli_main, "_list_posts", failing)
        result = CliRunner().invoke(cli_main.cli, ["posts"])
        assert result.exit_code == 1

    def test_serve_uses_config_logging(self, monkeypatch, tmp_path, restore_logging) -> None:
        calls = []
        monkeypatch.setattr(cli_main.uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"server": {"port": 9001}, "logging": {"level": "error"}}))
        monkeypatch.setenv("POSTBOARD_CONFIG", str(path))

        result = CliRunner().invoke(cli_main.cli, ["serve", "--config", str(path)])

        assert result.exit_code == 0
        target, kwargs = calls[0]
        assert target == "postboard.backend.api.app:create_app"
        assert kwargs["port"] == 9001
        assert kwargs["log_config"] is None
        assert restore_logging.level == logging.ERROR

    def test_serve_verbose_flag_wins(self, monkeypatch, tmp_path, restore_logging) -> None:
        monkeypatch.setattr(cli_main.uvicorn, "run", lambda target, **kwargs: None)
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"logging": {"level": "error"}}))
        monkeypatch.setenv("POSTBOARD_CONFIG", str(path))

        result = CliRunner().invoke(cli_main.cli, ["--verbose", "serve", "--config", str(path)])

        assert result.exit_code == 0
        assert restore_logging.level == logging.INFO
