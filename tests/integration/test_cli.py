"""CLI integration tests: exit code mapping, config loading and .env support."""

from __future__ import annotations

import json
import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest

from branchpreview import cli
from branchpreview.errors import ConfigError, IOFailure, RuntimeFailure, ValidationError
from tests.helpers.runner import RecordingRunner


def _argv(config: Path, *extra: str, refslug: str = "feature-x", project: str = "frontend") -> list[str]:
    return [
        "--refslug", refslug,
        "--repourl", "https://git.example/frontend.git",
        "--commitsha", "abc123",
        "--projectname", project,
        "--config", str(config),
        *extra,
    ]


@pytest.fixture(autouse=True)
def _in_tmp(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)


def test_cli_entrypoint_help() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "branchpreview.cli", "--help"],
        cwd=Path(__file__).resolve().parents[2],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    assert "usage: branchpreview" in result.stdout.lower()
    assert "--refslug" in result.stdout


def test_cli_dry_run_succeeds(host_factory, capsys: pytest.CaptureFixture[str]) -> None:
    fixture = host_factory()

    code = cli.main(_argv(fixture.config_path, "--dry-run", "--json"))

    assert code == 0
    data = json.loads(capsys.readouterr().out.strip().splitlines()[-1])["data"]
    assert data["path"] == "FRESH"
    assert data["dry_run"] is True
    assert list(fixture.hostdir.iterdir()) == []


def test_cli_missing_config_is_config_error(tmp_path: Path) -> None:
    assert cli.main(_argv(tmp_path / "absent.json")) == ConfigError.exit_code


def test_cli_default_config_path_from_cwd(host_factory, tmp_path: Path) -> None:
    fixture = host_factory()
    assert fixture.config_path == tmp_path / "env.json"

    argv = _argv(fixture.config_path, "--dry-run")
    config_index = argv.index("--config")
    del argv[config_index:config_index + 2]

    assert cli.main(argv) == 0


def test_cli_unknown_project_is_validation_error(host_factory) -> None:
    fixture = host_factory()
    assert cli.main(_argv(fixture.config_path, project="directoryZ")) == ValidationError.exit_code


def test_cli_missing_hostdir_is_io_failure(host_factory) -> None:
    fixture = host_factory()
    fixture.hostdir.rmdir()
    assert cli.main(_argv(fixture.config_path)) == IOFailure.exit_code


def test_cli_command_failure_is_runtime_failure(
    host_factory, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO)
    fixture = host_factory()
    monkeypatch.setattr(
        "branchpreview.app.CommandRunner",
        lambda dry_run=False: RecordingRunner(fail_on=("git init",)),
    )

    assert cli.main(_argv(fixture.config_path)) == RuntimeFailure.exit_code
    assert (fixture.hostdir / "feature-x" / "frontend").is_dir()
    errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert any("git init" in message for message in errors)


def test_cli_unexpected_error_maps_to_runtime_failure(host_factory, monkeypatch: pytest.MonkeyPatch) -> None:
    fixture = host_factory()

    def explode(*_args, **_kwargs):
        raise KeyError("boom")

    monkeypatch.setattr("branchpreview.commands.deploy.run_deploy", explode)
    assert cli.main(_argv(fixture.config_path)) == RuntimeFailure.exit_code


def test_env_file_loading(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("BRANCHPREVIEW_TEST_VALUE", raising=False)
    (tmp_path / ".env").write_text("BRANCHPREVIEW_TEST_VALUE=loaded-from-env\n")

    try:
        cli._load_dotenv_files()
        assert os.getenv("BRANCHPREVIEW_TEST_VALUE") == "loaded-from-env"
    finally:
        os.environ.pop("BRANCHPREVIEW_TEST_VALUE", None)


def test_env_file_overrides_hostdir(host_factory, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    fixture = host_factory()
    other_host = tmp_path / "other-host"
    other_host.mkdir()
    (other_host / "b2-ontest-bbbb2222" / "frontend").mkdir(parents=True)
    (tmp_path / ".env").write_text(f"BRANCHPREVIEW_HOSTDIR={other_host}\n")

    try:
        code = cli.main(
            _argv(fixture.config_path, "--dry-run", "--json", refslug="feature-ontest-bbbb2222")
        )
    finally:
        os.environ.pop("BRANCHPREVIEW_HOSTDIR", None)

    assert code == 0
    data = json.loads(capsys.readouterr().out.strip().splitlines()[-1])["data"]
    assert data["path"] == "REUSE_MATCHED"
    assert data["target"] == str(other_host / "b2-ontest-bbbb2222")


def test_cli_config_error_emits_json_envelope(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli.main(_argv(tmp_path / "absent.json", "--json"))

    assert code == ConfigError.exit_code
    envelope = json.loads(capsys.readouterr().out.strip())
    assert envelope["command"] == "deploy"
    assert envelope["data"]["status"] == "ERROR"
    assert envelope["data"]["error_type"] == "ConfigError"
    assert envelope["data"]["refslug"] == "feature-x"


def test_cli_config_error_without_json_prints_nothing(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(_argv(tmp_path / "absent.json")) == ConfigError.exit_code
    assert capsys.readouterr().out == ""
