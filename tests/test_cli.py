"""Tests for the factory-secrets command-line entry point."""

import pytest

from factory_secrets.__main__ import EXIT_ERROR, EXIT_NOT_FOUND, EXIT_OK, main
from factory_secrets.logging_config import configure_logging


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr("factory_secrets.__main__.configure_logging", lambda *a, **k: None)


@pytest.fixture
def file_env(tmp_path, monkeypatch):
    """Environment that lands on the encrypted file tier."""
    monkeypatch.setenv("FACTORY_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("FACTORY_SECRETS_PASSWORD", "cli-password")
    return tmp_path / "home" / "secrets"


def run(tmp_path, *args):
    return main(["--env-file", str(tmp_path / "missing.env"), *args])


class TestCommands:
    def test_status_reports_fallback(self, tmp_path, file_env, capsys):
        assert run(tmp_path, "status") == EXIT_OK
        out = capsys.readouterr().out
        assert f"encrypted files in {file_env}" in out
        assert "OS keyring unavailable" in out

    def test_set_get_delete(self, tmp_path, file_env, capsys):
        assert run(tmp_path, "set", "github_token", "--value", "ghp_cli") == EXIT_OK
        assert (file_env / "github_token.enc").exists()

        capsys.readouterr()
        assert run(tmp_path, "get", "github_token") == EXIT_OK
        assert capsys.readouterr().out.strip() == "ghp_cli"

        assert run(tmp_path, "delete", "github_token") == EXIT_OK
        assert not (file_env / "github_token.enc").exists()

    def test_set_prompts_for_value(self, tmp_path, file_env, monkeypatch, capsys):
        monkeypatch.setattr("factory_secrets.__main__.getpass.getpass", lambda prompt: "prompted")
        assert run(tmp_path, "set", "openai_api_key") == EXIT_OK

        capsys.readouterr()
        run(tmp_path, "get", "openai_api_key")
        assert capsys.readouterr().out.strip() == "prompted"

    def test_get_missing(self, tmp_path, file_env, capsys):
        assert run(tmp_path, "get", "nope") == EXIT_NOT_FOUND
        assert "secret not found: nope" in capsys.readouterr().err

    def test_delete_missing(self, tmp_path, file_env):
        assert run(tmp_path, "delete", "nope") == EXIT_NOT_FOUND


class TestErrors:
    def test_no_password_on_file_tier(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("FACTORY_HOME", str(tmp_path))
        assert run(tmp_path, "status") == EXIT_ERROR
        assert "FACTORY_SECRETS_PASSWORD" in capsys.readouterr().err

    def test_forced_keyring_unavailable(self, tmp_path, file_env, capsys):
        assert run(tmp_path, "--tier", "keyring", "status") == EXIT_ERROR
        assert "not usable" in capsys.readouterr().err

    def test_invalid_name(self, tmp_path, file_env, capsys):
        assert run(tmp_path, "set", "../etc", "--value", "x") == EXIT_ERROR
        assert "invalid secret name" in capsys.readouterr().err

    def test_wrong_password(self, tmp_path, file_env, monkeypatch, capsys):
        run(tmp_path, "set", "k", "--value", "v")
        monkeypatch.setenv("FACTORY_SECRETS_PASSWORD", "other-password")
        assert run(tmp_path, "get", "k") == EXIT_ERROR
        assert "authentication failed" in capsys.readouterr().err

    def test_dotenv_settings(self, tmp_path, capsys):
        env_file = tmp_path / ".env"
        env_file.write_text(
            f"FACTORY_HOME={tmp_path / 'dotenv-home'}\nFACTORY_SECRETS_PASSWORD=pw\n"
        )
        assert main(["--env-file", str(env_file), "set", "k", "--value", "v"]) == EXIT_OK
        assert (tmp_path / "dotenv-home" / "secrets" / "k.enc").exists()

    def test_secrets_dir_under_regular_file(self, tmp_path, monkeypatch, capsys):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        monkeypatch.setenv("FACTORY_SECRETS_DIR", str(blocker / "secrets"))
        monkeypatch.setenv("FACTORY_SECRETS_PASSWORD", "cli-password")

        assert run(tmp_path, "status") == EXIT_ERROR
        assert capsys.readouterr().err.startswith("Error: ")

    def test_unknown_log_level(self, tmp_path, file_env, monkeypatch, capsys):
        monkeypatch.setattr("factory_secrets.__main__.configure_logging", configure_logging)
        assert run(tmp_path, "--log-level", "chatty", "status") == EXIT_ERROR
        assert "Unknown log level" in capsys.readouterr().err
