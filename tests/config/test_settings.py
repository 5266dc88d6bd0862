"""Tests covering the application settings schema."""

import pytest

from record_prep.config.settings import AppSettings, get_settings, load_settings
from record_prep.storage import LabelLimits


def test_defaults_match_storage_limits() -> None:
    """Default settings produce the stock admission limits."""
    settings = AppSettings()
    assert settings.label_limits.as_config() == LabelLimits()
    assert settings.label_limits.log_throttle_seconds == 5.0
    assert settings.parser_pool.max_idle is None
    assert settings.logging.level == "INFO"


def test_environment_overrides_nested_values(monkeypatch) -> None:
    """`RP_`-prefixed variables override nested settings blocks."""
    monkeypatch.setenv("RP_LABEL_LIMITS__MAX_LABELS_PER_TIMESERIES", "10")
    monkeypatch.setenv("RP_LABEL_LIMITS__MAX_LABEL_VALUE_LEN", "256")

    limits = get_settings().label_limits.as_config()

    assert limits.max_labels_per_timeseries == 10
    assert limits.max_label_value_len == 256


def test_invalid_configuration_is_reported(monkeypatch) -> None:
    """Out of range values surface as a configuration error."""
    monkeypatch.setenv("RP_LABEL_LIMITS__MAX_LABELS_PER_TIMESERIES", "0")

    with pytest.raises(RuntimeError, match="Invalid configuration"):
        load_settings()
