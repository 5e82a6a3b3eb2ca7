"""Environment-driven settings and the per-session key record.

All values can be overridden via environment variables; nothing is read
from or written to a configuration file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping

from git_env_setup.core.errors import ConfigError

ENV_PREFIX = "GIT_SETUP_"

DEFAULT_KEY_NAME = "id_ed25519"
DEFAULT_KEY_COMMENT = "git-setup-key"
DEFAULT_AUTH_ATTEMPTS = 3
DEFAULT_REPO_LIMIT = 100
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    ssh_dir: Path
    key_name: str = DEFAULT_KEY_NAME
    key_comment: str = DEFAULT_KEY_COMMENT
    auth_attempts: int = DEFAULT_AUTH_ATTEMPTS
    repo_limit: int = DEFAULT_REPO_LIMIT
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def default_key_path(self) -> Path:
        return self.ssh_dir / self.key_name


def _positive_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ConfigError(f"{ENV_PREFIX}{name} must be at least 1, got {value}")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from ``GIT_SETUP_*`` environment variables."""
    env = os.environ if environ is None else environ
    ssh_dir = env.get(ENV_PREFIX + "SSH_DIR") or str(Path.home() / ".ssh")
    return Settings(
        ssh_dir=Path(ssh_dir).expanduser(),
        key_name=env.get(ENV_PREFIX + "KEY_NAME") or DEFAULT_KEY_NAME,
        key_comment=env.get(ENV_PREFIX + "KEY_COMMENT") or DEFAULT_KEY_COMMENT,
        auth_attempts=_positive_int(env, "AUTH_ATTEMPTS", DEFAULT_AUTH_ATTEMPTS),
        repo_limit=_positive_int(env, "REPO_LIMIT", DEFAULT_REPO_LIMIT),
        log_level=(env.get(ENV_PREFIX + "LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
    )


@dataclass(frozen=True)
class SessionConfig:
    """SSH key chosen so far in this run."""

    key_path: Path

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionConfig":
        return cls(key_path=settings.default_key_path)

    def with_key(self, key_path: Path) -> "SessionConfig":
        return replace(self, key_path=key_path)
