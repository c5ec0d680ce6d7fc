"""
Provider interfaces and data contracts.

Providers implement one or both capability protocols:
- CurrentPriceProvider: instantaneous BTC/EUR quote (CoinGecko, Bitfinex)
- HistoricalPriceProvider: BTC/EUR series over a Timeframe (CoinGecko, LiveCoinWatch)

Data is returned via frozen dataclasses for immutability and type safety.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Protocol, Tuple, runtime_checkable

from ..timeframes import Timeframe


class ProviderStatus(enum.Enum):
    """Health status of a data provider."""

    OK = "OK"
    DEGRADED = "DEGRADED"
    DOWN = "DOWN"


@dataclass(frozen=True)
class PricePoint:
    """One sample of a series: epoch milliseconds and EUR price."""

    timestamp: int
    price: float


@dataclass(frozen=True)
class CurrentPrice:
    """Immutable point-in-time BTC/EUR quote. change_24h is provider-reported, in percent."""

    price: float
    observed_at: int
    change_24h: Optional[float] = None
    provider_name: str = ""


@dataclass(frozen=True)
class HistoricalSeries:
    """
    Immutable BTC/EUR series for one timeframe.

    points is empty only when every provider failed, and then
    change_percentage is 0.
    """

    timeframe: Timeframe
    points: Tuple[PricePoint, ...] = ()
    change_percentage: float = 0.0
    provider_name: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.points


@dataclass
class ProviderHealth:
    """Mutable health state for a single provider instance."""

    provider_name: str
    status: ProviderStatus = ProviderStatus.OK
    last_ok_at: Optional[str] = None
    fail_count: int = 0
    last_error: Optional[str] = None

    def record_success(self) -> None:
        self.status = ProviderStatus.OK
        self.fail_count = 0
        self.last_ok_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
        self.last_error = None

    def record_failure(self, error: str) -> None:
        self.fail_count += 1
        self.last_error = error[:500]
        if self.fail_count >= 5:
            self.status = ProviderStatus.DOWN
        elif self.fail_count >= 2:
            self.status = ProviderStatus.DEGRADED


@runtime_checkable
class CurrentPriceProvider(Protocol):
    """Protocol for current-price providers."""

    @property
    def provider_name(self) -> str: ...

    def fetch_current(self) -> CurrentPrice:
        """Fetch the current BTC/EUR quote. Raises ProviderError on any failure."""
        ...


@runtime_checkable
class HistoricalPriceProvider(Protocol):
    """Protocol for historical-series providers."""

    @property
    def provider_name(self) -> str: ...

    def fetch_historical(self, timeframe: Timeframe) -> List[PricePoint]:
        """
        Fetch the BTC/EUR series for a timeframe, oldest first.

        The provider maps the timeframe to its own native request parameters.
        Raises ProviderError on any failure.
        """
        ...
