"""
Bitfinex current-price provider (fallback quote source).

Uses the public Bitfinex v2 API (no authentication required):
  GET {base}/ticker/tBTCEUR

Ticker format:
  [BID, BID_SIZE, ASK, ASK_SIZE, DAILY_CHANGE, DAILY_CHANGE_RELATIVE, LAST_PRICE, ...]
"""

from __future__ import annotations

from ..core.errors import ShapeError
from ..timeutils import now_seconds
from .base import CurrentPrice
from .http import HTTP_TIMEOUT_S, get_json, require_number, require_price

BITFINEX_BASE_URL = "https://api-pub.bitfinex.com/v2"
TICKER_SYMBOL = "tBTCEUR"

_IDX_DAILY_CHANGE_RELATIVE = 5
_IDX_LAST_PRICE = 6


class BitfinexProvider:
    """Fetch the BTC/EUR ticker from the Bitfinex public API."""

    def __init__(
        self,
        base_url: str = BITFINEX_BASE_URL,
        timeout_s: float = HTTP_TIMEOUT_S,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s

    @property
    def provider_name(self) -> str:
        return "bitfinex"

    def fetch_current(self) -> CurrentPrice:
        data = get_json(
            f"{self._base_url}/ticker/{TICKER_SYMBOL}",
            self.provider_name,
            timeout_s=self._timeout_s,
        )
        if not isinstance(data, list) or len(data) <= _IDX_LAST_PRICE:
            raise ShapeError(
                f"Bitfinex ticker is not an array of at least {_IDX_LAST_PRICE + 1} fields",
                self.provider_name,
            )

        price = require_price(data[_IDX_LAST_PRICE], "LAST_PRICE", self.provider_name)
        relative = require_number(
            data[_IDX_DAILY_CHANGE_RELATIVE], "DAILY_CHANGE_RELATIVE", self.provider_name
        )

        # The ticker carries no timestamp; stamp it on receipt.
        return CurrentPrice(
            price=price,
            change_24h=relative * 100,
            observed_at=now_seconds(),
            provider_name=self.provider_name,
        )
