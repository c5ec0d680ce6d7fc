"""
Core primitives shared by providers, resolvers and the cache.
Stable facade: errors only.
"""

from __future__ import annotations

from .errors import (
    AllProvidersFailedError,
    BtcPriceFeedError,
    NetworkError,
    ProviderError,
    ShapeError,
    TimeframeError,
)

__all__ = [
    "AllProvidersFailedError",
    "BtcPriceFeedError",
    "NetworkError",
    "ProviderError",
    "ShapeError",
    "TimeframeError",
]
