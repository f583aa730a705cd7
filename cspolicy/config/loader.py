"""Env var config loading with pydantic-settings."""

from __future__ import annotations

from pathlib import Path

import structlog
from pydantic_settings import BaseSettings, SettingsConfigDict

from cspolicy.directives import META_EXCLUDED

logger = structlog.get_logger()

_PRESETS_PATH = Path(__file__).parent / "header_presets.yaml"


class PolicySettings(BaseSettings):
    """Policy defaults, overridden by ``CSP_*`` env vars or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="CSP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "info"
    log_json: bool = True

    # Start every policy from the strict default table
    use_defaults: bool = False
    report_only: bool = False

    # Directives dropped from <meta> output
    meta_excluded: list[str] = list(META_EXCLUDED)

    presets_file: str = str(_PRESETS_PATH)
    # Preset applied by the CLI when --preset is not given; empty means none
    default_preset: str = ""


_settings: PolicySettings | None = None


def get_settings() -> PolicySettings:
    """Get or create the singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def load_settings() -> PolicySettings:
    """Load settings from env vars (env vars override model defaults)."""
    global _settings
    _settings = PolicySettings()
    logger.info(
        "config_loaded",
        use_defaults=_settings.use_defaults,
        report_only=_settings.report_only,
        presets_file=_settings.presets_file,
    )
    return _settings
