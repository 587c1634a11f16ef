"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``GRAFQ_*`` prefix
  3. TOML file    — ``grafq.toml`` in the config directory, or ``--config``
  4. Code defaults — baked into the section models

Database connection details are read separately by :class:`DbSettings`,
which uses the unprefixed variables ``DB_URI`` and ``NEO4J_*``.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from grafq.config.models import ConsoleDefaults
from grafq.config.paths import AppPaths
from grafq.errors import GrafqError


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``grafq.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                raise GrafqError(f"Invalid TOML in {toml_path}") from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class GrafqSettings(BaseSettings):
    """Unified settings for the grafq CLI.

    Stored on the :class:`~grafq.commands._context.AppContext` created by
    the root command group.

    Attributes:
        pager: Pager command overriding the default ``less -+F``.
        log: Log level name; when set, logs go to a file instead of stderr.
        config_path: The TOML file that was read, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "GRAFQ_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    config_path: Path | None = None

    # --- Environment ---
    pager: str | None = None
    log: str | None = None

    # --- CLI flags ---
    debug: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    console: ConsoleDefaults = Field(default_factory=ConsoleDefaults)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        paths: AppPaths | None = None,
        **cli_flags: Any,
    ) -> GrafqSettings:
        """Construct settings from a CLI invocation.

        Reads *config_path* when given (it must exist), otherwise the
        default ``grafq.toml`` in the config directory if present.
        """
        toml_path: Path | None
        if config_path:
            toml_path = Path(config_path)
            if not toml_path.is_file():
                raise GrafqError(f"config file not found: {toml_path}")
        else:
            default = (paths or AppPaths.resolve()).config_file
            toml_path = default if default.is_file() else None

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        except ValidationError as exc:
            raise GrafqError("invalid configuration") from exc
        finally:
            _tls.toml_path = None


class DbSettings(BaseSettings):
    """Connection details for the graph database, read from the environment."""

    model_config = {
        "frozen": True,
        "env_ignore_empty": True,
        "extra": "ignore",
    }

    db_uri: str | None = None
    neo4j_user: str | None = None
    neo4j_password: str | None = None
    neo4j_db: str | None = None
