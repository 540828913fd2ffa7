"""Process-wide nulldb settings.

Adapters receive their configuration explicitly (see
``nulldb.core.adapters.types.AdapterConfig``). These settings are the
optional process-wide fallback: the project root that relative schema
paths are resolved against, the conventional schema location, and the
logging knobs. They are process-wide state with an explicit
``configure()`` / ``reset_settings()`` lifecycle; nothing reads them
implicitly before ``configure()`` has been called.

Features:
    - **NullDBSettings:** project_root, schema_path, log_level, json_logs
    - **env_prefix:** ``NULLDB_`` environment variables and ``.env`` support
    - **Extra ignore:** Unknown env vars don't cause startup failures

Examples:
    >>> import nulldb
    >>> settings = nulldb.configure(project_root="/srv/app")
    >>> settings.schema_path
    'db/schema.py'

Tags:
    settings, configuration, pydantic, environment, nulldb
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nulldb.core.errors import MissingConfigError
from nulldb.core.logging import configure_logging

DEFAULT_SCHEMA_PATH = "db/schema.py"


class NullDBSettings(BaseSettings):
    """Settings shared by every adapter in the process.

    Fields
    ──────
    project_root : Directory relative schema paths are resolved against
    schema_path  : Schema file loaded when no explicit path is given
    log_level    : Structlog log level used by ``configure(setup_logging=True)``
    json_logs    : JSON output (True), console (False), auto-detect (None)
    """

    model_config = SettingsConfigDict(
        env_prefix="NULLDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_root: Path | None = None
    schema_path: str = Field(
        default=DEFAULT_SCHEMA_PATH,
        description="Conventional schema file, relative to project_root",
    )

    log_level: str = "INFO"
    json_logs: bool | None = None


_settings: NullDBSettings | None = None


def configure(*, setup_logging: bool = False, **overrides: Any) -> NullDBSettings:
    """Initialise the process-wide settings.

    ``overrides`` take precedence over ``NULLDB_*`` environment variables.
    With ``setup_logging=True`` structlog is configured from the result.
    """
    global _settings
    _settings = NullDBSettings(**overrides)
    if setup_logging:
        configure_logging(level=_settings.log_level, json_format=_settings.json_logs)
    return _settings


def get_settings() -> NullDBSettings:
    """Return the process-wide settings.

    Raises:
        MissingConfigError: ``configure()`` was never called.
    """
    if _settings is None:
        raise MissingConfigError(
            "nulldb",
            "nulldb is not configured. Call nulldb.configure(project_root=...) first",
        )
    return _settings


def is_configured() -> bool:
    return _settings is not None


def reset_settings() -> None:
    """Forget the process-wide settings (test isolation)."""
    global _settings
    _settings = None


__all__ = [
    "DEFAULT_SCHEMA_PATH",
    "NullDBSettings",
    "configure",
    "get_settings",
    "is_configured",
    "reset_settings",
]
