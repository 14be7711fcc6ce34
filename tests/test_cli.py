"""Tests for the Typer commands."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from typer.testing import CliRunner

from cli.main import app
from core.config import EXAMPLE_ENV
from core.services import sync_pipeline
from tests.conftest import FakeTraduora

runner = CliRunner()


@pytest.fixture(autouse=True)
def _mock_server(monkeypatch: pytest.MonkeyPatch, client_factory: object) -> None:
    monkeypatch.setattr(sync_pipeline, "_default_client_factory", client_factory)


class TestSyncCommand:
    def test_missing_env_file_prints_guidance(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["sync", "--env-file", str(tmp_path / ".env")])

        assert result.exit_code == 1
        assert "TRADUORA_BASE_URL=" in result.output
        assert "TARGET_LOCALES=" in result.output

    def test_successful_run(
        self, write_env: Callable[..., Path], localization_root: Path
    ) -> None:
        result = runner.invoke(app, ["sync", "--env-file", str(write_env())])

        assert result.exit_code == 0, result.output
        assert (localization_root / "en.lproj" / "Localizable.strings").is_file()
        assert (localization_root / "es.lproj" / "Localizable.strings").is_file()

    def test_default_command_is_sync(
        self,
        write_env: Callable[..., Path],
        localization_root: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("TRADUORA_SYNC_ENV_FILE", str(write_env()))

        result = runner.invoke(app, [])

        assert result.exit_code == 0, result.output
        assert (localization_root / "en.lproj" / "Localizable.strings").is_file()

    def test_per_locale_failure_keeps_exit_code_zero(
        self, write_env: Callable[..., Path], fake_server: FakeTraduora
    ) -> None:
        fake_server.export_status["en"] = 503

        result = runner.invoke(app, ["sync", "-e", str(write_env()), "--quiet"])

        assert result.exit_code == 0
        assert "Failed to update en localization" in result.output

    def test_authentication_failure_exits_non_zero(
        self, write_env: Callable[..., Path], fake_server: FakeTraduora
    ) -> None:
        fake_server.token_status = 401

        result = runner.invoke(app, ["sync", "-e", str(write_env())])

        assert result.exit_code == 1
        assert "Authentication failed" in result.output

    def test_invalid_config_exits_non_zero(self, write_env: Callable[..., Path]) -> None:
        result = runner.invoke(app, ["sync", "-e", str(write_env(TRADUORA_PASSWORD=None))])

        assert result.exit_code == 1
        assert "TRADUORA_PASSWORD" in result.output

    def test_nothing_to_download_exits_zero(
        self, write_env: Callable[..., Path], fake_server: FakeTraduora, localization_root: Path
    ) -> None:
        fake_server.locales = ["de"]

        result = runner.invoke(app, ["sync", "-e", str(write_env())])

        assert result.exit_code == 0
        assert "None of the target locales" in result.output
        assert not localization_root.exists()


class TestInitCommand:
    def test_writes_template(self, tmp_path: Path) -> None:
        env_path = tmp_path / ".env"

        result = runner.invoke(app, ["init", "--env-file", str(env_path)])

        assert result.exit_code == 0
        assert env_path.read_text(encoding="utf-8") == EXAMPLE_ENV

    def test_refuses_to_overwrite_without_force(self, tmp_path: Path) -> None:
        env_path = tmp_path / ".env"
        env_path.write_text("MINE=1\n", encoding="utf-8")

        result = runner.invoke(app, ["init", "--env-file", str(env_path)])

        assert result.exit_code == 1
        assert env_path.read_text(encoding="utf-8") == "MINE=1\n"

        forced = runner.invoke(app, ["init", "--env-file", str(env_path), "--force"])

        assert forced.exit_code == 0
        assert env_path.read_text(encoding="utf-8") == EXAMPLE_ENV
