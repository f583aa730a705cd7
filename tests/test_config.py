"""Settings and preset loading tests."""

from __future__ import annotations

import pytest

from cspolicy import META_EXCLUDED, Policy
from cspolicy.config.loader import PolicySettings, get_settings, load_settings
from cspolicy.config.presets import get_preset, load_presets, preset_names


class TestPolicySettings:
    """Test env var config loading."""

    def test_default_values(self, monkeypatch):
        """Settings have sensible defaults."""
        monkeypatch.delenv("CSP_LOG_JSON", raising=False)
        monkeypatch.delenv("CSP_LOG_LEVEL", raising=False)
        settings = PolicySettings()
        assert settings.log_level == "info"
        assert settings.log_json is True
        assert settings.use_defaults is False
        assert settings.report_only is False
        assert settings.meta_excluded == list(META_EXCLUDED)
        assert settings.default_preset == ""
        assert settings.presets_file.endswith("header_presets.yaml")

    def test_env_override(self, monkeypatch):
        """Environment variables override defaults."""
        monkeypatch.setenv("CSP_USE_DEFAULTS", "true")
        monkeypatch.setenv("CSP_REPORT_ONLY", "1")
        settings = PolicySettings()
        assert settings.use_defaults is True
        assert settings.report_only is True

    def test_meta_excluded_from_env(self, monkeypatch):
        monkeypatch.setenv("CSP_META_EXCLUDED", '["sandbox", "report-uri"]')
        assert PolicySettings().meta_excluded == ["sandbox", "report-uri"]

    def test_load_settings_returns_instance(self):
        assert isinstance(load_settings(), PolicySettings)

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()


class TestPresets:
    def test_bundled_names(self):
        assert preset_names() == ["strict", "balanced", "permissive"]

    def test_strict_preset(self):
        assert get_preset("strict").header_value() == (
            "default-src 'self'; script-src 'self'; style-src 'self'; img-src 'self'; "
            "font-src 'self'; connect-src 'self'; frame-ancestors 'none'; "
            "form-action 'self'; base-uri 'self'; object-src 'none'"
        )

    def test_balanced_lists(self):
        policy = get_preset("balanced")
        assert policy["img-src"] == ("'self'", "data:", "https:")
        assert policy["script-src"] == ("'self'", "'unsafe-inline'")

    def test_fresh_instance_each_call(self):
        first = get_preset("permissive")
        first["connect-src"] = "'self'"
        assert get_preset("permissive")["connect-src"] == "*"

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            get_preset("paranoid")

    def test_policy_from_preset(self):
        assert Policy.from_preset("balanced") == get_preset("balanced")

    def test_cached(self):
        assert load_presets() is load_presets()

    def test_missing_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CSP_PRESETS_FILE", str(tmp_path / "missing.yaml"))
        assert preset_names() == []
        with pytest.raises(KeyError):
            get_preset("strict")

    def test_custom_file(self, monkeypatch, tmp_path):
        path = tmp_path / "presets.yaml"
        path.write_text("api:\n  default_src: \"'none'\"\n  frame_ancestors: \"'none'\"\n")
        monkeypatch.setenv("CSP_PRESETS_FILE", str(path))
        assert get_preset("api").header_value() == "default-src 'none'; frame-ancestors 'none'"
