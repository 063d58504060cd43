"""User defaults for shieldsvg.

Reads and writes ~/.shieldsvg/config.json. Only the keys in DEFAULTS are
recognised; anything else in the file is ignored.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

from shieldsvg import colors, measurer
from shieldsvg.badge import BadgeStyle

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH: Path = Path.home() / ".shieldsvg" / "config.json"

DEFAULTS: dict = {
    "style": BadgeStyle.FLAT.value,
    "label_color": None,
    "message_color": None,
    "logo_color": None,
    "text_cache_size": measurer.DEFAULT_CACHE_SIZE,
    "color_cache_size": colors.DEFAULT_CACHE_SIZE,
}

_INT_KEYS = {"text_cache_size", "color_cache_size"}


def load_config(config_path: Path | None = None) -> dict:
    """Load config from JSON file. Returns {} if file missing or invalid."""
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        logger.warning("Ignoring unreadable config file %s", path)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict, config_path: Path | None = None) -> None:
    """Write config dict to JSON file. Creates parent dirs if needed."""
    path = config_path or DEFAULT_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def get_defaults(config_path: Path | None = None) -> dict:
    """Built-in defaults overlaid with whatever the config file sets."""
    merged = dict(DEFAULTS)
    stored = load_config(config_path)
    merged.update({key: value for key, value in stored.items() if key in DEFAULTS})
    return merged


def _coerce(key: str, value: str):
    if key == "style":
        return BadgeStyle.parse(value).value
    if key in _INT_KEYS:
        try:
            size = int(value)
        except (TypeError, ValueError):
            raise ValueError(f"{key} must be an integer, got {value!r}") from None
        if size < 0:
            raise ValueError(f"{key} must not be negative")
        return size
    return value or None


def set_default(key: str, value: str, config_path: Path | None = None) -> dict:
    """Persist one default and return the updated file contents."""
    if key not in DEFAULTS:
        known = ", ".join(sorted(DEFAULTS))
        raise ValueError(f"Unknown config key {key!r} (known keys: {known})")
    config = load_config(config_path)
    config[key] = _coerce(key, value)
    save_config(config, config_path)
    logger.debug("Saved %s=%r", key, config[key])
    return config
