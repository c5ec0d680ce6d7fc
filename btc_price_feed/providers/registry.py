"""
Provider registry: central catalog of available providers.

Providers register themselves here under a name, per capability (current,
historical). Config priority lists then decide which providers are tried in
what order.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from .base import CurrentPriceProvider, HistoricalPriceProvider

logger = logging.getLogger(__name__)

CurrentFactory = Union[Callable[[], CurrentPriceProvider], CurrentPriceProvider]
HistoricalFactory = Union[Callable[[], HistoricalPriceProvider], HistoricalPriceProvider]


class ProviderRegistry:
    """
    Registry mapping provider names to factories/instances.

    A factory is any zero-argument callable (a class or a partial). One
    instance per name is created lazily and reused.

    Usage:
        registry = ProviderRegistry()
        registry.register_current("coingecko", CoinGeckoProvider)
        registry.register_current("bitfinex", BitfinexProvider)

        providers = registry.build_current_chain(["coingecko", "bitfinex"])
    """

    def __init__(self) -> None:
        self._current_factories: Dict[str, Any] = {}
        self._historical_factories: Dict[str, Any] = {}
        self._current_instances: Dict[str, CurrentPriceProvider] = {}
        self._historical_instances: Dict[str, HistoricalPriceProvider] = {}

    def register_current(self, name: str, factory: CurrentFactory) -> None:
        """Register a current-price provider by name."""
        self._current_factories[name] = factory
        self._current_instances.pop(name, None)
        logger.debug("Registered current-price provider: %s", name)

    def register_historical(self, name: str, factory: HistoricalFactory) -> None:
        """Register a historical-series provider by name."""
        self._historical_factories[name] = factory
        self._historical_instances.pop(name, None)
        logger.debug("Registered historical provider: %s", name)

    @staticmethod
    def _instantiate(factory: Any, protocol: type) -> Any:
        if isinstance(factory, protocol) and not isinstance(factory, type):
            return factory
        return factory()

    def get_current(self, name: str) -> CurrentPriceProvider:
        """Get or instantiate a current-price provider by name."""
        if name not in self._current_instances:
            factory = self._current_factories.get(name)
            if factory is None:
                raise KeyError(
                    f"Unknown current-price provider '{name}'. "
                    f"Available: {list(self._current_factories)}"
                )
            self._current_instances[name] = self._instantiate(factory, CurrentPriceProvider)
        return self._current_instances[name]

    def get_historical(self, name: str) -> HistoricalPriceProvider:
        """Get or instantiate a historical provider by name."""
        if name not in self._historical_instances:
            factory = self._historical_factories.get(name)
            if factory is None:
                raise KeyError(
                    f"Unknown historical provider '{name}'. "
                    f"Available: {list(self._historical_factories)}"
                )
            self._historical_instances[name] = self._instantiate(factory, HistoricalPriceProvider)
        return self._historical_instances[name]

    @property
    def current_names(self) -> List[str]:
        return list(self._current_factories)

    @property
    def historical_names(self) -> List[str]:
        return list(self._historical_factories)

    def build_current_chain(self, priority: Optional[List[str]] = None) -> List[CurrentPriceProvider]:
        """Build an ordered list of current-price providers from a priority list."""
        names = priority or list(self._current_factories)
        skipped = [n for n in names if n not in self._current_factories]
        if skipped:
            logger.warning("Ignoring unknown current-price providers: %s", skipped)
        return [self.get_current(n) for n in names if n in self._current_factories]

    def build_historical_chain(
        self, priority: Optional[List[str]] = None
    ) -> List[HistoricalPriceProvider]:
        """Build an ordered list of historical providers from a priority list."""
        names = priority or list(self._historical_factories)
        skipped = [n for n in names if n not in self._historical_factories]
        if skipped:
            logger.warning("Ignoring unknown historical providers: %s", skipped)
        return [self.get_historical(n) for n in names if n in self._historical_factories]
