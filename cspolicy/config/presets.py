"""Named policy presets loaded from YAML."""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml

from cspolicy.config.loader import get_settings
from cspolicy.policy import Policy

logger = structlog.get_logger()

# Cache loaded presets
_presets: dict | None = None


def load_presets() -> dict:
    """Load presets from the configured YAML file, caching after first load."""
    global _presets
    if _presets is not None:
        return _presets
    path = Path(get_settings().presets_file)
    if not path.exists():
        logger.error("header_presets_not_found", path=str(path))
        _presets = {}
        return _presets
    with open(path, encoding="utf-8") as f:
        _presets = yaml.safe_load(f) or {}
    logger.debug("header_presets_loaded", path=str(path), presets=sorted(_presets))
    return _presets


def reset_presets_cache() -> None:
    """Reset the presets cache (for testing)."""
    global _presets
    _presets = None


def preset_names() -> list[str]:
    return list(load_presets())


def get_preset(name: str) -> Policy:
    """Build a fresh Policy from the named preset.

    Raises KeyError for an unknown preset name.
    """
    presets = load_presets()
    if name not in presets:
        raise KeyError(f"Unknown preset: {name!r}")
    return Policy(presets[name] or {})
