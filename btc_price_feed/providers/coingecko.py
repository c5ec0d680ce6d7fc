"""
CoinGecko provider: current quote and historical series (primary source).

Uses the public CoinGecko API (no authentication required):
  GET {base}/simple/price?ids=bitcoin&vs_currencies=eur&include_24hr_change=true&include_last_updated_at=true
  GET {base}/coins/bitcoin/market_chart?vs_currency=eur&days=<int>&interval=<daily|weekly|monthly>
"""
from __future__ import annotations

from typing import List, Optional

from ..core.errors import ShapeError
from ..timeframes import Timeframe, timeframe_params
from .base import CurrentPrice, PricePoint
from .http import HTTP_TIMEOUT_S, get_json, require_number, require_price

COINGECKO_BASE_URL = "https://api.coingecko.com/api/v3"
COIN_ID = "bitcoin"
VS_CURRENCY = "eur"


class CoinGeckoProvider:
    """Fetch BTC/EUR quotes and market charts from the CoinGecko public API."""

    def __init__(
        self,
        base_url: str = COINGECKO_BASE_URL,
        timeout_s: float = HTTP_TIMEOUT_S,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s

    @property
    def provider_name(self) -> str:
        return "coingecko"

    def fetch_current(self) -> CurrentPrice:
        data = get_json(
            f"{self._base_url}/simple/price",
            self.provider_name,
            params={
                "ids": COIN_ID,
                "vs_currencies": VS_CURRENCY,
                "include_24hr_change": "true",
                "include_last_updated_at": "true",
            },
            timeout_s=self._timeout_s,
        )
        if not isinstance(data, dict) or not isinstance(data.get(COIN_ID), dict):
            raise ShapeError("CoinGecko response missing 'bitcoin'", self.provider_name)
        quote = data[COIN_ID]

        price = require_price(quote.get(VS_CURRENCY), "eur", self.provider_name)
        updated = require_number(quote.get("last_updated_at"), "last_updated_at", self.provider_name)
        change: Optional[float] = None
        if quote.get("eur_24h_change") is not None:
            change = require_number(quote["eur_24h_change"], "eur_24h_change", self.provider_name)

        return CurrentPrice(
            price=price,
            change_24h=change,
            observed_at=int(updated),
            provider_name=self.provider_name,
        )

    def fetch_historical(self, timeframe: Timeframe) -> List[PricePoint]:
        span_days, granularity = timeframe_params(timeframe)
        data = get_json(
            f"{self._base_url}/coins/{COIN_ID}/market_chart",
            self.provider_name,
            params={
                "vs_currency": VS_CURRENCY,
                "days": span_days,
                "interval": granularity.value,
            },
            timeout_s=self._timeout_s,
        )
        prices = data.get("prices") if isinstance(data, dict) else None
        if not isinstance(prices, list):
            raise ShapeError("CoinGecko response missing 'prices' array", self.provider_name)

        points: List[PricePoint] = []
        for i, pair in enumerate(prices):
            if not isinstance(pair, list) or len(pair) != 2:
                raise ShapeError(
                    f"CoinGecko prices[{i}] is not a [timestamp, price] pair", self.provider_name
                )
            ts = require_number(pair[0], f"prices[{i}][0]", self.provider_name)
            price = require_price(pair[1], f"prices[{i}][1]", self.provider_name)
            points.append(PricePoint(timestamp=int(ts), price=price))
        points.sort(key=lambda p: p.timestamp)
        return points
