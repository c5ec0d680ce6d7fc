"""
Top-level public API surface. Stable facades only.
Canonical entrypoint: import btc_price_feed; await btc_price_feed.get_current_price(), etc.
"""

from __future__ import annotations

from . import core, providers
from ._version import __version__
from .api import (
    create_price_cache,
    get_current_price,
    get_historical_price_data,
    use_bitcoin_price,
)
from .cache import PriceSubscription, RevalidatingCache
from .change import percent_change
from .core.errors import NetworkError, ProviderError, ShapeError, TimeframeError
from .providers.base import CurrentPrice, HistoricalSeries, PricePoint
from .timeframes import Timeframe

# Do not add exports without updating __all__.
__all__ = [
    "__version__",
    "core",
    "providers",
    "CurrentPrice",
    "HistoricalSeries",
    "NetworkError",
    "PricePoint",
    "PriceSubscription",
    "ProviderError",
    "RevalidatingCache",
    "ShapeError",
    "Timeframe",
    "TimeframeError",
    "create_price_cache",
    "get_current_price",
    "get_historical_price_data",
    "percent_change",
    "use_bitcoin_price",
]
