"""
Fake current-price and historical providers for tests: deterministic data,
fail-N-then-succeed, always-fail.

No live network; used by the resolver, cache and facade tests.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from btc_price_feed.core.errors import NetworkError, ShapeError
from btc_price_feed.providers.base import CurrentPrice, PricePoint
from btc_price_feed.timeframes import Timeframe

# Deterministic observation time (2026-01-01T00:00:00Z) for reproducible tests.
FAKE_OBSERVED_AT = 1767225600
FAKE_START_MS = FAKE_OBSERVED_AT * 1000
DAY_MS = 86_400_000


def make_points(
    prices: Sequence[float], *, start_ms: int = FAKE_START_MS, step_ms: int = DAY_MS
) -> List[PricePoint]:
    """Evenly spaced points, oldest first."""
    return [PricePoint(timestamp=start_ms + i * step_ms, price=p) for i, p in enumerate(prices)]


# ---------------------------------------------------------------------------
# Current price: always succeed with deterministic data
# ---------------------------------------------------------------------------


class FakeCurrentProvider:
    """Current-price provider that always returns the same quote. No network."""

    def __init__(self, name: str, price: float = 50_000.0, change_24h: Optional[float] = 1.5):
        self._name = name
        self.price = price
        self._change_24h = change_24h
        self.call_count = 0

    @property
    def provider_name(self) -> str:
        return self._name

    def fetch_current(self) -> CurrentPrice:
        self.call_count += 1
        return CurrentPrice(
            price=self.price,
            change_24h=self._change_24h,
            observed_at=FAKE_OBSERVED_AT,
            provider_name=self._name,
        )


# ---------------------------------------------------------------------------
# Current price: fail N times then succeed
# ---------------------------------------------------------------------------


class FakeCurrentProviderFailNThenSucceed:
    """Current-price provider that fails the first N calls, then returns a quote."""

    def __init__(self, name: str, fail_times: int, price: float = 50_000.0):
        self._name = name
        self._fail_times = fail_times
        self._price = price
        self.call_count = 0

    @property
    def provider_name(self) -> str:
        return self._name

    def fetch_current(self) -> CurrentPrice:
        self.call_count += 1
        if self.call_count <= self._fail_times:
            raise NetworkError(f"{self._name} simulated failure #{self.call_count}", self._name)
        return CurrentPrice(
            price=self._price,
            change_24h=None,
            observed_at=FAKE_OBSERVED_AT,
            provider_name=self._name,
        )


# ---------------------------------------------------------------------------
# Current price: always fail
# ---------------------------------------------------------------------------


class FakeCurrentProviderAlwaysFail:
    """Current-price provider that always raises the given ProviderError type. No network."""

    def __init__(self, name: str = "fake_fail", error_type: type = NetworkError):
        self._name = name
        self._error_type = error_type
        self.call_count = 0

    @property
    def provider_name(self) -> str:
        return self._name

    def fetch_current(self) -> CurrentPrice:
        self.call_count += 1
        raise self._error_type(f"{self._name} always fails", self._name)


# ---------------------------------------------------------------------------
# Historical: always succeed with deterministic data
# ---------------------------------------------------------------------------


class FakeHistoricalProvider:
    """Historical provider that returns a fixed series for every timeframe. No network."""

    def __init__(self, name: str, points: Sequence[PricePoint]):
        self._name = name
        self._points = list(points)
        self.call_count = 0
        self.timeframes: List[Timeframe] = []

    @property
    def provider_name(self) -> str:
        return self._name

    def fetch_historical(self, timeframe: Timeframe) -> List[PricePoint]:
        self.call_count += 1
        self.timeframes.append(timeframe)
        return list(self._points)


# ---------------------------------------------------------------------------
# Historical: always fail
# ---------------------------------------------------------------------------


class FakeHistoricalProviderAlwaysFail:
    """Historical provider that always raises. No network."""

    def __init__(self, name: str = "fake_hist_fail", error_type: type = ShapeError):
        self._name = name
        self._error_type = error_type
        self.call_count = 0

    @property
    def provider_name(self) -> str:
        return self._name

    def fetch_historical(self, timeframe: Timeframe) -> List[PricePoint]:
        self.call_count += 1
        raise self._error_type(f"{self._name} always fails", self._name)


__all__ = [
    "DAY_MS",
    "FAKE_OBSERVED_AT",
    "FAKE_START_MS",
    "FakeCurrentProvider",
    "FakeCurrentProviderAlwaysFail",
    "FakeCurrentProviderFailNThenSucceed",
    "FakeHistoricalProvider",
    "FakeHistoricalProviderAlwaysFail",
    "make_points",
]
