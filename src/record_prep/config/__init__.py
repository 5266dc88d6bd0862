"""Lightweight configuration package exports."""

from __future__ import annotations

from .settings import (
    AppSettings,
    LabelLimitsSettings,
    LoggingSettings,
    ParserPoolSettings,
    get_settings,
    load_settings,
)

__all__ = [
    "AppSettings",
    "LabelLimitsSettings",
    "LoggingSettings",
    "ParserPoolSettings",
    "get_settings",
    "load_settings",
]
