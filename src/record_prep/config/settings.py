"""Configuration system for the record preparation layer."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:  # pragma: no cover - typing only
    from record_prep.storage.labels_limits import LabelLimits


class LoggingSettings(BaseModel):
    """Structured logging configuration."""

    level: str = Field(default="INFO", description="Log level for application output")
    json_output: bool = Field(
        default=True, description="Render log events as JSON instead of console text"
    )


class LabelLimitsSettings(BaseModel):
    """Admission limits applied to labeled samples before they reach storage."""

    max_labels_per_timeseries: int = Field(
        default=40,
        ge=1,
        description="Samples with more labels than this are ignored",
    )
    max_label_value_len: int = Field(
        default=4 * 1024,
        ge=1,
        description="Samples with a label value longer than this (in bytes) are ignored",
    )
    log_throttle_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Minimum interval between warnings for the same rejection reason",
    )

    def as_config(self) -> LabelLimits:
        from record_prep.storage.labels_limits import LabelLimits

        return LabelLimits(
            max_labels_per_timeseries=self.max_labels_per_timeseries,
            max_label_value_len=self.max_label_value_len,
        )


class ParserPoolSettings(BaseModel):
    """Sizing for the shared JSON parser pool."""

    max_idle: int | None = Field(
        default=None,
        ge=0,
        description="Maximum number of idle parsers retained; unbounded when unset",
    )


class AppSettings(BaseSettings):
    """Top-level settings, read from ``RP_``-prefixed environment variables."""

    service_name: str = Field(default="record-prep")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    label_limits: LabelLimitsSettings = Field(default_factory=LabelLimitsSettings)
    parser_pool: ParserPoolSettings = Field(default_factory=ParserPoolSettings)

    model_config = SettingsConfigDict(env_prefix="RP_", env_nested_delimiter="__")


def load_settings() -> AppSettings:
    """Load application settings from the environment."""
    try:
        return AppSettings()
    except ValidationError as err:
        raise RuntimeError(f"Invalid configuration: {err}") from err


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Cached accessor used by production code."""
    return load_settings()
