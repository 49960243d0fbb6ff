"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups. ``from_env`` builds one from process environment
variables (optionally merged with a ``.env`` file by the CLI).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from wordchain.errors import ConfigurationError

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields except ``secret_key`` have sensible defaults::

        config = AppConfig(secret_key="s3cret", port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False

    # Security
    secret_key: str = ""
    cookie_secure: bool = True
    access_window_seconds: int = 15 * 60
    refresh_window_seconds: int = 90 * 24 * 60 * 60

    # Storage
    database_url: str = "sqlite:///:memory:"

    # Limits
    max_content_length: int = 64 * 1024  # 64 KiB

    # Response options
    allow_cors: bool = False

    # Shutdown
    shutdown_hook_timeout: float = 10.0  # tree-wide down hooks
    shutdown_grace_timeout: float = 30.0  # in-flight connections

    # Logging
    log_level: str = "info"
    log_format: str = "text"  # "text" or "json"

    def validate(self) -> None:
        """Raise ``ConfigurationError`` for settings the app cannot start with."""
        if not self.secret_key:
            msg = "secret_key must not be empty (set JWT_KEY)."
            raise ConfigurationError(msg)
        if self.access_window_seconds <= 0 or self.refresh_window_seconds <= 0:
            msg = "Token windows must be positive."
            raise ConfigurationError(msg)
        if self.max_content_length < 0:
            msg = "max_content_length must not be negative."
            raise ConfigurationError(msg)
        if self.log_format not in ("text", "json"):
            msg = f"log_format must be 'text' or 'json', got {self.log_format!r}."
            raise ConfigurationError(msg)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: object) -> AppConfig:
        """Build a config from environment variables.

        Recognized variables: ``JWT_KEY``, ``DATABASE``, ``COOKIE_SECURE``,
        ``HOST``, ``PORT``, ``ALLOW_CORS``, ``LOG_LEVEL``, ``LOG_FORMAT``.
        ``COOKIE_SECURE`` is true when unset and only true when set to
        ``"true"``. Keyword *overrides* win over the environment.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        if "JWT_KEY" in env:
            values["secret_key"] = env["JWT_KEY"]
        if "DATABASE" in env:
            values["database_url"] = env["DATABASE"]
        if "COOKIE_SECURE" in env:
            values["cookie_secure"] = env["COOKIE_SECURE"] == "true"
        if "HOST" in env:
            values["host"] = env["HOST"]
        if "PORT" in env:
            try:
                values["port"] = int(env["PORT"])
            except ValueError as exc:
                msg = f"PORT must be an integer, got {env['PORT']!r}."
                raise ConfigurationError(msg) from exc
        if "ALLOW_CORS" in env:
            values["allow_cors"] = env["ALLOW_CORS"].strip().lower() in _TRUTHY
        if "LOG_LEVEL" in env:
            values["log_level"] = env["LOG_LEVEL"].lower()
        if "LOG_FORMAT" in env:
            values["log_format"] = env["LOG_FORMAT"].lower()

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)  # type: ignore[arg-type]
