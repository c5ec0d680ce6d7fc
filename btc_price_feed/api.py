"""
Public facade consumed by presentation code.

    price = await get_current_price()                     # raises ProviderError on total failure
    series = await get_historical_price_data("1y", price)  # never raises for provider failure

    async with use_bitcoin_price() as sub:
        await sub.refresh()
        sub.value, sub.is_loading, sub.is_validating, sub.is_error

Resolvers are built from config on each call unless one is passed in.
use_bitcoin_price consumers share one default price cache per event loop,
so their refreshes are deduplicated; pass cache= to use a private one.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Union

from . import config
from .cache import PriceSubscription, RevalidatingCache
from .providers.base import CurrentPrice, HistoricalSeries
from .providers.chain import CurrentPriceResolver, HistoricalPriceResolver
from .providers.defaults import create_current_resolver, create_historical_resolver
from .timeframes import Timeframe

logger = logging.getLogger(__name__)

# Shared cache and the event loop its tasks belong to.
_default_cache: Optional[RevalidatingCache[CurrentPrice]] = None
_default_cache_loop: Optional[asyncio.AbstractEventLoop] = None


async def get_current_price(resolver: Optional[CurrentPriceResolver] = None) -> CurrentPrice:
    """Current BTC/EUR quote from the first healthy provider."""
    resolver = resolver or create_current_resolver()
    return await resolver.resolve()


async def get_historical_price_data(
    timeframe: Union[Timeframe, str],
    current_price: Optional[CurrentPrice] = None,
    resolver: Optional[HistoricalPriceResolver] = None,
) -> HistoricalSeries:
    """BTC/EUR series for timeframe; empty with 0% change if every provider fails."""
    resolver = resolver or create_historical_resolver()
    return await resolver.resolve(timeframe, current_price)


def create_price_cache(
    resolver: Optional[CurrentPriceResolver] = None,
    *,
    refresh_interval_ms: Optional[int] = None,
    deduping_window_ms: Optional[int] = None,
    revalidate_on_focus: Optional[bool] = None,
) -> RevalidatingCache[CurrentPrice]:
    """Revalidating cache around the current-price resolver; unset knobs come from config."""
    resolver = resolver or create_current_resolver()
    if refresh_interval_ms is None:
        refresh_interval_ms = config.refresh_interval_ms()
    if deduping_window_ms is None:
        deduping_window_ms = config.deduping_window_ms()
    if revalidate_on_focus is None:
        revalidate_on_focus = config.revalidate_on_focus()
    return RevalidatingCache(
        resolver.resolve,
        refresh_interval_ms=refresh_interval_ms,
        deduping_window_ms=deduping_window_ms,
        revalidate_on_focus=revalidate_on_focus,
    )


def default_price_cache(refresh_interval_ms: Optional[int] = None) -> RevalidatingCache[CurrentPrice]:
    """
    The shared price cache for the running event loop, created on first use.

    refresh_interval_ms only applies when the cache is created.
    """
    global _default_cache, _default_cache_loop
    loop = asyncio.get_running_loop()
    if _default_cache is None or _default_cache_loop is not loop:
        _default_cache = create_price_cache(refresh_interval_ms=refresh_interval_ms)
        _default_cache_loop = loop
    elif refresh_interval_ms is not None and refresh_interval_ms != _default_cache.refresh_interval_ms:
        logger.debug(
            "Shared price cache already polls every %d ms; ignoring %d ms",
            _default_cache.refresh_interval_ms, refresh_interval_ms,
        )
    return _default_cache


def use_bitcoin_price(
    refresh_interval_ms: Optional[int] = None,
    *,
    cache: Optional[RevalidatingCache[CurrentPrice]] = None,
) -> PriceSubscription[CurrentPrice]:
    """Subscribe to the polled current price. Must be called from a running event loop."""
    if cache is None:
        cache = default_price_cache(refresh_interval_ms)
    return cache.subscribe()
