"""Configuration loading."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

from fitdesk.core.constants import PREPARATION_TIME, SOUND_COMPLETE, SOUND_START


class ConfigError(RuntimeError):
    """Raised when config file parsing fails."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_data_dir() -> Path:
    """Resolve XDG-style data directory with env override."""
    raw = os.getenv("FITDESK_DATA_DIR", "~/.local/share/fitdesk")
    return expand_path(raw)


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("FITDESK_CONFIG_FILE", "~/.config/fitdesk/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    data_dir = default_data_dir()
    return {
        "storage": {
            "path": str(data_dir / "storage.json"),
        },
        "session": {
            "preparation_seconds": PREPARATION_TIME,
        },
        "sound": {
            "enabled": True,
            "player": "auto",
            "start": SOUND_START,
            "complete": SOUND_COMPLETE,
        },
    }


DEFAULT_CONFIG: Dict[str, Any] = _default_config()


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except Exception as exc:
        if suffix in {".toml", ""}:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()

    if cfg_path.exists():
        cfg = _deep_merge(cfg, _read_config(cfg_path))

    return cfg


def resolve_storage_path(config: Dict[str, Any]) -> Path:
    """Resolve the key-value store file from env/config."""
    raw = os.getenv("FITDESK_STORAGE") or config.get("storage", {}).get("path")
    if not raw:
        raw = str(default_data_dir() / "storage.json")
    return expand_path(raw)


def preparation_seconds(config: Dict[str, Any]) -> int:
    """Return the configured preparation countdown, falling back to the default."""
    raw = config.get("session", {}).get("preparation_seconds", PREPARATION_TIME)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"session.preparation_seconds must be an integer, got {raw!r}") from None
    if value < 0:
        raise ConfigError("session.preparation_seconds must not be negative")
    return value
