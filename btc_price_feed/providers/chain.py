"""
Provider chains: ordered fallback logic for current and historical prices.

A chain tries providers strictly in priority order. The next provider is only
called once the previous one has definitively failed; there is no retry on a
single provider. The two chains differ in what happens when every provider
fails: the current-price chain raises, the historical chain degrades to an
empty series.

Provider adapters are blocking (requests), so each call runs in a worker
thread via asyncio.to_thread and the event loop is never blocked.
"""
from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import Dict, List, Optional, Sequence, Union

from ..change import series_change
from ..core.errors import AllProvidersFailedError, ProviderError
from ..timeframes import Timeframe, parse_timeframe, timeframe_params
from .base import (
    CurrentPrice,
    CurrentPriceProvider,
    HistoricalPriceProvider,
    HistoricalSeries,
    PricePoint,
    ProviderHealth,
)

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_DELAY_S = 0.3


def splice_live_price(
    points: Sequence[PricePoint], live_price: Optional[CurrentPrice]
) -> List[PricePoint]:
    """
    Replace the last point's price with the live quote, keeping its timestamp.

    No-op when points is empty or no usable live price is given.
    """
    out = list(points)
    if out and live_price is not None and live_price.price > 0:
        out[-1] = dataclasses.replace(out[-1], price=live_price.price)
    return out


class CurrentPriceResolver:
    """
    Ordered chain of current-price providers with sequential fallback.

    Raises AllProvidersFailedError when the whole chain fails; there is no
    synthetic default.
    """

    def __init__(self, providers: Sequence[CurrentPriceProvider]) -> None:
        if not providers:
            raise ValueError("CurrentPriceResolver needs at least one provider")
        self._providers = list(providers)
        self._health: Dict[str, ProviderHealth] = {
            p.provider_name: ProviderHealth(provider_name=p.provider_name) for p in self._providers
        }

    @property
    def providers(self) -> List[CurrentPriceProvider]:
        return list(self._providers)

    async def resolve(self) -> CurrentPrice:
        errors: List[ProviderError] = []
        for provider in self._providers:
            name = provider.provider_name
            health = self._health[name]
            try:
                quote = await asyncio.to_thread(provider.fetch_current)
            except ProviderError as exc:
                errors.append(exc)
                health.record_failure(str(exc))
                logger.warning("Current price from %s failed: %s", name, exc)
                continue
            health.record_success()
            if errors:
                logger.info("Current price served by fallback provider %s", name)
            return quote

        summary = "; ".join(f"{type(e).__name__}: {e}" for e in errors)
        logger.error("All current price providers failed: %s", summary)
        raise AllProvidersFailedError(f"All current price providers failed: {summary}", errors)

    def get_health(self) -> Dict[str, ProviderHealth]:
        """Return health status for all providers in the chain."""
        return dict(self._health)


class HistoricalPriceResolver:
    """
    Ordered chain of historical-series providers.

    Waits fallback_delay_s between a failure and the next provider. Total
    failure is absorbed: the result is an empty series with 0% change.
    """

    def __init__(
        self,
        providers: Sequence[HistoricalPriceProvider],
        fallback_delay_s: float = DEFAULT_FALLBACK_DELAY_S,
        strict_timeframes: bool = True,
    ) -> None:
        if not providers:
            raise ValueError("HistoricalPriceResolver needs at least one provider")
        self._providers = list(providers)
        self._fallback_delay_s = fallback_delay_s
        self._strict_timeframes = strict_timeframes
        self._health: Dict[str, ProviderHealth] = {
            p.provider_name: ProviderHealth(provider_name=p.provider_name) for p in self._providers
        }

    @property
    def providers(self) -> List[HistoricalPriceProvider]:
        return list(self._providers)

    async def resolve(
        self,
        timeframe: Union[Timeframe, str],
        live_price: Optional[CurrentPrice] = None,
    ) -> HistoricalSeries:
        """
        Fetch the series for timeframe, splicing live_price into the last point.

        Raises TimeframeError for an unknown timeframe in strict mode, before
        any provider is called. Never raises for provider failure.
        """
        tf = parse_timeframe(timeframe, strict=self._strict_timeframes)
        span_days, granularity = timeframe_params(tf)
        logger.debug("Resolving %s history (%d days, %s)", tf.value, span_days, granularity.value)

        for i, provider in enumerate(self._providers):
            name = provider.provider_name
            if i > 0 and self._fallback_delay_s > 0:
                await asyncio.sleep(self._fallback_delay_s)
            try:
                raw = await asyncio.to_thread(provider.fetch_historical, tf)
            except ProviderError as exc:
                self._health[name].record_failure(str(exc))
                logger.warning("Historical %s data from %s failed: %s", tf.value, name, exc)
                continue
            if not raw:
                # An empty series counts as a failed attempt.
                self._health[name].record_failure("empty series")
                logger.warning("Historical %s data from %s was empty", tf.value, name)
                continue
            self._health[name].record_success()

            points = splice_live_price(raw, live_price)
            return HistoricalSeries(
                timeframe=tf,
                points=tuple(points),
                change_percentage=series_change(points),
                provider_name=name,
            )

        logger.error("All historical providers failed for %s, returning empty series", tf.value)
        return HistoricalSeries(timeframe=tf)

    def get_health(self) -> Dict[str, ProviderHealth]:
        return dict(self._health)
