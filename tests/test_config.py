"""Tests for settings resolution (defaults, environment, .env, overrides)."""

import os
from pathlib import Path

from safepass.config import (
    ENV_DB_PATH,
    ENV_KEY_FILE,
    ENV_LOG_DIR,
    Settings,
    load_settings,
)


class TestLoadSettings:
    def test_defaults_live_in_home(self):
        settings = load_settings()
        home = Path.home()
        assert settings.key_file == home / "safepass.key"
        assert settings.db_path == home / "safepass.db3"
        assert settings.log_dir == home / ".safepass" / "logs"

    def test_environment_overrides_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setenv(ENV_KEY_FILE, str(tmp_path / "env.key"))
        monkeypatch.setenv(ENV_DB_PATH, str(tmp_path / "env.db3"))
        monkeypatch.setenv(ENV_LOG_DIR, str(tmp_path / "env-logs"))
        settings = load_settings()
        assert settings == Settings(
            key_file=tmp_path / "env.key",
            db_path=tmp_path / "env.db3",
            log_dir=tmp_path / "env-logs",
        )

    def test_explicit_overrides_win(self, tmp_path, monkeypatch):
        monkeypatch.setenv(ENV_KEY_FILE, str(tmp_path / "env.key"))
        settings = load_settings(key_file=tmp_path / "flag.key", db_path=str(tmp_path / "flag.db3"))
        assert settings.key_file == tmp_path / "flag.key"
        assert settings.db_path == tmp_path / "flag.db3"

    def test_blank_environment_value_ignored(self, monkeypatch):
        monkeypatch.setenv(ENV_DB_PATH, "   ")
        assert load_settings().db_path == Path.home() / "safepass.db3"

    def test_tilde_is_expanded(self, monkeypatch):
        monkeypatch.setenv(ENV_KEY_FILE, "~/keys/vault.key")
        assert load_settings().key_file == Path.home() / "keys" / "vault.key"

    def test_env_file_is_read(self, tmp_path, monkeypatch):
        env_file = tmp_path / "custom.env"
        env_file.write_text(f"{ENV_DB_PATH}={tmp_path / 'dotenv.db3'}\n")
        try:
            assert load_settings(env_file).db_path == tmp_path / "dotenv.db3"
        finally:
            # load_dotenv writes os.environ directly, outside monkeypatch
            os.environ.pop(ENV_DB_PATH, None)

    def test_dotenv_in_cwd_is_found(self, tmp_path, monkeypatch):
        # conftest chdirs into tmp_path
        (tmp_path / ".env").write_text(f"{ENV_KEY_FILE}={tmp_path / 'cwd.key'}\n")
        try:
            assert load_settings().key_file == tmp_path / "cwd.key"
        finally:
            os.environ.pop(ENV_KEY_FILE, None)

    def test_real_environment_beats_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / "custom.env"
        env_file.write_text(f"{ENV_KEY_FILE}={tmp_path / 'dotenv.key'}\n")
        monkeypatch.setenv(ENV_KEY_FILE, str(tmp_path / "real.key"))
        assert load_settings(env_file).key_file == tmp_path / "real.key"
