"""Filesystem locations for requests, run history and logs."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

APP_NAME = "tuiman"


@dataclass(frozen=True)
class AppPaths:
    config_dir: Path
    state_dir: Path

    @property
    def requests_dir(self) -> Path:
        return self.config_dir / "requests"

    @property
    def history_db_path(self) -> Path:
        return self.state_dir / "history.db"

    @property
    def log_path(self) -> Path:
        return self.state_dir / f"{APP_NAME}.log"

    def ensure(self) -> "AppPaths":
        for path in (self.config_dir, self.state_dir, self.requests_dir):
            path.mkdir(parents=True, exist_ok=True)
        return self


def _resolve(env: Mapping[str, str], override: str, xdg: str, fallback: Path) -> Path:
    explicit = (env.get(override) or "").strip()
    if explicit:
        return Path(explicit).expanduser()
    base = (env.get(xdg) or "").strip()
    if base:
        return Path(base).expanduser() / APP_NAME
    return fallback


def get_paths(env: Optional[Mapping[str, str]] = None) -> AppPaths:
    """Resolve paths from TUIMAN_* overrides, then XDG variables, then ~/.config style defaults."""
    env = os.environ if env is None else env
    home = Path(env.get("HOME") or Path.home())
    return AppPaths(
        config_dir=_resolve(env, "TUIMAN_CONFIG_DIR", "XDG_CONFIG_HOME", home / ".config" / APP_NAME),
        state_dir=_resolve(env, "TUIMAN_STATE_DIR", "XDG_STATE_HOME", home / ".local" / "state" / APP_NAME),
    )


__all__ = ["AppPaths", "get_paths", "APP_NAME"]
