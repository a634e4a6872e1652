from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger("tuiman.config")

DEFAULT_CONFIG_PATH = Path.home() / ".tuiman_config.yaml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def user_config_path() -> Path:
    override = os.environ.get("TUIMAN_CONFIG", "").strip()
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def _load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    path = path or user_config_path()
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _save_config(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = path or user_config_path()
    if not data:
        if path.exists():
            path.unlink()
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, allow_unicode=True, sort_keys=True), encoding="utf-8")


def get_theme() -> str:
    return str(_load_config().get("theme", "") or "").strip()


def set_theme(value: str) -> None:
    data = _load_config()
    value = (value or "").strip()
    if value:
        data["theme"] = value
    else:
        data.pop("theme", None)
    _save_config(data)


def get_log_level() -> str:
    level = str(_load_config().get("log_level", "") or "").strip().upper()
    return level if level in LOG_LEVELS else "INFO"


def get_split_ratios() -> Dict[str, float]:
    raw = _load_config().get("ratios")
    return dict(raw) if isinstance(raw, dict) else {}


def set_split_ratios(values: Dict[str, float]) -> None:
    data = _load_config()
    if values:
        data["ratios"] = {key: float(value) for key, value in values.items()}
    else:
        data.pop("ratios", None)
    _save_config(data)
