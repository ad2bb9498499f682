# SafePass - Configuration
#
# File locations for the key, the record database and the event logs.
# Precedence: explicit overrides (CLI flags) > environment > .env > defaults.

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv

APP_NAME = "safepass"

ENV_KEY_FILE = "SAFEPASS_KEY_FILE"
ENV_DB_PATH = "SAFEPASS_DB_PATH"
ENV_LOG_DIR = "SAFEPASS_LOG_DIR"


def default_key_file() -> Path:
    return Path.home() / f"{APP_NAME}.key"


def default_db_path() -> Path:
    return Path.home() / f"{APP_NAME}.db3"


def default_log_dir() -> Path:
    return Path.home() / f".{APP_NAME}" / "logs"


@dataclass(frozen=True)
class Settings:
    """Resolved file locations for one run."""

    key_file: Path
    db_path: Path
    log_dir: Path


def _resolve(override: Optional[Union[str, Path]], env_var: str, default: Path) -> Path:
    if override:
        return Path(override).expanduser()
    value = os.environ.get(env_var, "").strip()
    if value:
        return Path(value).expanduser()
    return default


def load_settings(
    env_file: Optional[Union[str, Path]] = None,
    *,
    key_file: Optional[Union[str, Path]] = None,
    db_path: Optional[Union[str, Path]] = None,
    log_dir: Optional[Union[str, Path]] = None,
) -> Settings:
    """Build Settings from overrides, the environment and an optional .env file.

    Variables already set in the real environment are never replaced by
    values from the .env file.
    """
    dotenv_path = str(env_file) if env_file is not None else find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path=dotenv_path, override=False)

    return Settings(
        key_file=_resolve(key_file, ENV_KEY_FILE, default_key_file()),
        db_path=_resolve(db_path, ENV_DB_PATH, default_db_path()),
        log_dir=_resolve(log_dir, ENV_LOG_DIR, default_log_dir()),
    )
