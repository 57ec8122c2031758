"""Configuration loading from environment variables."""

from __future__ import annotations

import os
import secrets
from collections.abc import Mapping
from dataclasses import dataclass

from campusevents.auth.passwords import DEFAULT_ROUNDS

ENV_PREFIX = "CAMPUSEVENTS_"

DEFAULT_DB_PATH = "campusevents.db"
DEFAULT_SESSION_MAX_AGE = 14 * 24 * 60 * 60  # 14 days


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class Settings:
    """Application settings."""

    db_path: str = DEFAULT_DB_PATH
    secret_key: str = ""
    session_max_age: int = DEFAULT_SESSION_MAX_AGE
    bcrypt_rounds: int = DEFAULT_ROUNDS
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from CAMPUSEVENTS_* variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Returns:
            Parsed settings.

        Raises:
            ConfigError: If a value cannot be parsed, or no secret key is set
                outside debug mode.
        """
        env = os.environ if environ is None else environ

        debug = _parse_bool(env.get(f"{ENV_PREFIX}DEBUG", "false"), "DEBUG")
        secret_key = env.get(f"{ENV_PREFIX}SECRET_KEY", "")
        if not secret_key:
            if not debug:
                raise ConfigError(f"{ENV_PREFIX}SECRET_KEY must be set")
            # Sessions won't survive a restart in debug mode
            secret_key = secrets.token_urlsafe(32)

        settings = cls(
            db_path=env.get(f"{ENV_PREFIX}DB_PATH", DEFAULT_DB_PATH),
            secret_key=secret_key,
            session_max_age=_parse_int(
                env.get(f"{ENV_PREFIX}SESSION_MAX_AGE"), "SESSION_MAX_AGE", DEFAULT_SESSION_MAX_AGE
            ),
            bcrypt_rounds=_parse_int(
                env.get(f"{ENV_PREFIX}BCRYPT_ROUNDS"), "BCRYPT_ROUNDS", DEFAULT_ROUNDS
            ),
            debug=debug,
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ConfigError: If a value is out of range.
        """
        if self.session_max_age <= 0:
            raise ConfigError("SESSION_MAX_AGE must be positive")
        # bcrypt accepts cost factors 4..31
        if not 4 <= self.bcrypt_rounds <= 31:
            raise ConfigError("BCRYPT_ROUNDS must be between 4 and 31")


def _parse_int(raw: str | None, name: str, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from e


def _parse_bool(raw: str, name: str) -> bool:
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off", ""):
        return False
    raise ConfigError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")
