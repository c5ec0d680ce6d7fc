"""
Provider architecture for BTC/EUR price acquisition.

Adapters for each upstream source, registered under names and assembled into
priority-ordered resolvers: the current-price chain raises on total failure,
the historical chain degrades to an empty series.
"""

from __future__ import annotations

from .base import (
    CurrentPrice,
    CurrentPriceProvider,
    HistoricalPriceProvider,
    HistoricalSeries,
    PricePoint,
    ProviderHealth,
    ProviderStatus,
)
from .bitfinex import BitfinexProvider
from .chain import CurrentPriceResolver, HistoricalPriceResolver, splice_live_price
from .coingecko import CoinGeckoProvider
from .livecoinwatch import LiveCoinWatchProvider
from .registry import ProviderRegistry

__all__ = [
    "BitfinexProvider",
    "CoinGeckoProvider",
    "CurrentPrice",
    "CurrentPriceProvider",
    "CurrentPriceResolver",
    "HistoricalPriceProvider",
    "HistoricalPriceResolver",
    "HistoricalSeries",
    "LiveCoinWatchProvider",
    "PricePoint",
    "ProviderHealth",
    "ProviderRegistry",
    "ProviderStatus",
    "splice_live_price",
]
