"""
Shared exception types for btc_price_feed.

Adapters raise NetworkError or ShapeError; both are ProviderError, which is
what the resolvers catch. Catch BtcPriceFeedError for any package-raised error.
"""

from __future__ import annotations

from typing import List


class BtcPriceFeedError(Exception):
    """Base exception for btc_price_feed; catch this for any package-raised error."""

    pass


class ProviderError(BtcPriceFeedError):
    """An upstream provider could not produce a usable result."""

    def __init__(self, message: str, provider_name: str | None = None) -> None:
        super().__init__(message)
        self.provider_name = provider_name


class NetworkError(ProviderError):
    """Transport failure, timeout or non-2xx response."""


class ShapeError(ProviderError):
    """Response received but missing or malformed expected fields."""


class AllProvidersFailedError(ProviderError):
    """Every provider in a chain failed; `errors` holds one entry per provider."""

    def __init__(self, message: str, errors: List[ProviderError]) -> None:
        super().__init__(message)
        self.errors = list(errors)


class TimeframeError(BtcPriceFeedError, ValueError):
    """Unknown timeframe value."""


__all__ = [
    "AllProvidersFailedError",
    "BtcPriceFeedError",
    "NetworkError",
    "ProviderError",
    "ShapeError",
    "TimeframeError",
]
