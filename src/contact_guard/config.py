"""YAML/dict config loader for contact-guard.

Supports loading from a YAML file or a plain dict (for embedding in a
larger application config).

Example YAML:

    content_filter:
      max_length: 20000        # characters; null disables the cap
      regex_timeout: 0.5       # seconds per pattern scan; null disables
      platform_name: PlankMarket
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

from .content_filter import PLATFORM_NAME, ContentFilter, FilterConfig

_DEFAULTS = FilterConfig()


def _positive_or_none(name: str, value: Any) -> Any:
    if value is None:
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number or null, got {value!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive or null, got {value!r}")
    return value


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "content_filter" key or flat
    if "content_filter" in data:
        data = data["content_filter"] or {}

    return {
        "max_length": _positive_or_none("max_length", data.get("max_length", _DEFAULTS.max_length)),
        "regex_timeout": _positive_or_none(
            "regex_timeout", data.get("regex_timeout", _DEFAULTS.regex_timeout),
        ),
        "platform_name": data.get("platform_name") or PLATFORM_NAME,
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml
    with open(path) as f:
        return load_config(yaml.safe_load(f))


def create_filter(config: dict[str, Any] | None = None) -> ContentFilter:
    """Create a ContentFilter from a raw or normalized config dict."""
    cfg = load_config(config)
    return ContentFilter(FilterConfig(
        max_length=cfg["max_length"],
        regex_timeout=cfg["regex_timeout"],
        platform_name=cfg["platform_name"],
    ))
