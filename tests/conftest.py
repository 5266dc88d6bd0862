from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry

from record_prep.config.settings import get_settings
from record_prep.logstorage.json_parser import get_parser_pool


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _clear_cached_singletons(monkeypatch):
    for name in (
        "RP_LABEL_LIMITS__MAX_LABELS_PER_TIMESERIES",
        "RP_LABEL_LIMITS__MAX_LABEL_VALUE_LEN",
        "RP_PARSER_POOL__MAX_IDLE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_parser_pool.cache_clear()
    yield
    get_settings.cache_clear()
    get_parser_pool.cache_clear()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()
