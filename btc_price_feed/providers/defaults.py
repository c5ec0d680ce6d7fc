"""
Default provider registry configuration.

Registers built-in providers and builds resolvers from config.yaml settings.
To add a new provider, register it here and add it to the priority list.
"""
from __future__ import annotations

import functools
import logging
from typing import List, Optional

from .. import config
from .bitfinex import BitfinexProvider
from .chain import CurrentPriceResolver, HistoricalPriceResolver
from .coingecko import CoinGeckoProvider
from .livecoinwatch import LiveCoinWatchProvider
from .registry import ProviderRegistry

logger = logging.getLogger(__name__)


def create_default_registry(cfg: Optional[dict] = None) -> ProviderRegistry:
    """Create a registry with all built-in providers, wired to config endpoints."""
    cfg = cfg or config.get_config()
    timeout_s = float(cfg["http"]["timeout_s"])

    # One CoinGecko instance serves both capabilities.
    coingecko = CoinGeckoProvider(base_url=cfg["coingecko"]["base_url"], timeout_s=timeout_s)

    registry = ProviderRegistry()
    registry.register_current("coingecko", coingecko)
    registry.register_current(
        "bitfinex",
        functools.partial(
            BitfinexProvider, base_url=cfg["bitfinex"]["base_url"], timeout_s=timeout_s
        ),
    )
    registry.register_historical("coingecko", coingecko)
    registry.register_historical(
        "livecoinwatch",
        functools.partial(
            LiveCoinWatchProvider,
            api_key=cfg["livecoinwatch"]["api_key"],
            base_url=cfg["livecoinwatch"]["base_url"],
            timeout_s=timeout_s,
        ),
    )
    if not cfg["livecoinwatch"]["api_key"]:
        logger.debug("LIVECOINWATCH_API_KEY not set; the livecoinwatch provider will fail")
    return registry


def create_current_resolver(
    registry: Optional[ProviderRegistry] = None,
    priority: Optional[List[str]] = None,
) -> CurrentPriceResolver:
    """Build the current-price resolver (default: coingecko -> bitfinex)."""
    reg = registry or create_default_registry()
    order = priority or config.current_priority()
    return CurrentPriceResolver(reg.build_current_chain(order))


def create_historical_resolver(
    registry: Optional[ProviderRegistry] = None,
    priority: Optional[List[str]] = None,
) -> HistoricalPriceResolver:
    """Build the historical resolver (default: coingecko -> livecoinwatch)."""
    reg = registry or create_default_registry()
    order = priority or config.historical_priority()
    return HistoricalPriceResolver(
        reg.build_historical_chain(order),
        fallback_delay_s=config.fallback_delay_s(),
        strict_timeframes=config.strict_timeframes(),
    )
