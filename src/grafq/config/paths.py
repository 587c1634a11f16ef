"""Base directories for grafq's config, history, and logs.

Follows the XDG base directory layout on every non-Windows platform
(``XDG_*_HOME`` when set, otherwise the usual dot-directories under the
home directory).  Windows uses ``APPDATA`` and ``LOCALAPPDATA``.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from grafq.errors import GrafqError

APP_NAME = "grafq"
HISTORY_FILENAME = "history.txt"
LOG_FILENAME = "grafq.log"
CONFIG_FILENAME = "grafq.toml"


@dataclass(frozen=True)
class AppPaths:
    """Resolved per-user directories, each already scoped to grafq."""

    config_dir: Path
    data_dir: Path
    state_dir: Path

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILENAME

    @property
    def history_file(self) -> Path:
        return self.data_dir / HISTORY_FILENAME

    @property
    def log_file(self) -> Path:
        return self.state_dir / LOG_FILENAME

    @classmethod
    def resolve(
        cls,
        env: Mapping[str, str] | None = None,
        *,
        platform: str | None = None,
    ) -> AppPaths:
        """Work out the directories from *env* (default: ``os.environ``).

        Raises:
            GrafqError: If no home directory can be determined.
        """
        env = os.environ if env is None else env
        platform = platform or sys.platform

        if platform == "win32":
            roaming = _env_dir(env, "APPDATA")
            local = _env_dir(env, "LOCALAPPDATA")
            if roaming is None or local is None:
                home = _home_dir(env)
                roaming = roaming or home / "AppData" / "Roaming"
                local = local or home / "AppData" / "Local"
            return cls(
                config_dir=roaming / APP_NAME,
                data_dir=roaming / APP_NAME,
                state_dir=local / APP_NAME,
            )

        config_home = _env_dir(env, "XDG_CONFIG_HOME")
        data_home = _env_dir(env, "XDG_DATA_HOME")
        state_home = _env_dir(env, "XDG_STATE_HOME")
        if config_home is None or data_home is None or state_home is None:
            home = _home_dir(env)
            config_home = config_home or home / ".config"
            data_home = data_home or home / ".local" / "share"
            state_home = state_home or home / ".local" / "state"
        return cls(
            config_dir=config_home / APP_NAME,
            data_dir=data_home / APP_NAME,
            state_dir=state_home / APP_NAME,
        )


def _env_dir(env: Mapping[str, str], key: str) -> Path | None:
    """Return ``env[key]`` as a path if it is set to an absolute path."""
    value = env.get(key)
    if not value:
        return None
    path = Path(value)
    return path if path.is_absolute() else None


def _home_dir(env: Mapping[str, str]) -> Path:
    home = env.get("HOME") or env.get("USERPROFILE")
    if home:
        return Path(home)
    try:
        return Path.home()
    except RuntimeError as exc:
        raise GrafqError("couldn't determine your home directory", unexpected=True) from exc
