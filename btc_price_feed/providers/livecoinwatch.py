"""
LiveCoinWatch historical provider (fallback series source).

Uses the LiveCoinWatch API (API key required, header x-api-key):
  POST {base}/coins/single/history
  body: {"currency": "EUR", "code": "BTC", "start": <ms>, "end": <ms>, "meta": false}
  -> {"history": [{"date": <ms>, "rate": <price>, ...}, ...]}

The history endpoint picks its own sample spacing from the requested window,
so the series is resampled to the timeframe's granularity here, keeping the
last real sample (and its timestamp) of each bucket.
"""
from __future__ import annotations

import logging
from typing import List

import pandas as pd

from ..core.errors import ProviderError, ShapeError
from ..timeframes import Granularity, Timeframe, timeframe_params
from ..timeutils import now_ms
from .base import PricePoint
from .http import HTTP_TIMEOUT_S, post_json, require_number, require_price

logger = logging.getLogger(__name__)

LIVECOINWATCH_BASE_URL = "https://api.livecoinwatch.com"
MS_PER_DAY = 86_400_000

_RESAMPLE_FREQ = {
    Granularity.DAILY: "D",
    Granularity.WEEKLY: "W",
    Granularity.MONTHLY: "MS",
}


def downsample(points: List[PricePoint], granularity: Granularity) -> List[PricePoint]:
    """Keep the last point of each daily/weekly/monthly UTC bucket, oldest first."""
    if not points:
        return []
    df = pd.DataFrame(
        {"timestamp": [p.timestamp for p in points], "price": [p.price for p in points]}
    )
    df.index = pd.to_datetime(df["timestamp"], unit="ms", utc=True)
    df = df.sort_index()
    sampled = df.resample(_RESAMPLE_FREQ[granularity]).last().dropna()
    return [
        PricePoint(timestamp=int(row.timestamp), price=float(row.price))
        for row in sampled.itertuples(index=False)
    ]


class LiveCoinWatchProvider:
    """Fetch the BTC/EUR series from the LiveCoinWatch coin history endpoint."""

    def __init__(
        self,
        api_key: str = "",
        base_url: str = LIVECOINWATCH_BASE_URL,
        timeout_s: float = HTTP_TIMEOUT_S,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s

    @property
    def provider_name(self) -> str:
        return "livecoinwatch"

    def fetch_historical(self, timeframe: Timeframe) -> List[PricePoint]:
        if not self._api_key:
            raise ProviderError("LiveCoinWatch API key is not configured", self.provider_name)

        span_days, granularity = timeframe_params(timeframe)
        end = now_ms()
        start = end - span_days * MS_PER_DAY
        data = post_json(
            f"{self._base_url}/coins/single/history",
            self.provider_name,
            body={"currency": "EUR", "code": "BTC", "start": start, "end": end, "meta": False},
            headers={"x-api-key": self._api_key},
            timeout_s=self._timeout_s,
        )
        history = data.get("history") if isinstance(data, dict) else None
        if not isinstance(history, list):
            raise ShapeError("LiveCoinWatch response missing 'history' array", self.provider_name)

        raw: List[PricePoint] = []
        for i, entry in enumerate(history):
            if not isinstance(entry, dict):
                raise ShapeError(f"LiveCoinWatch history[{i}] is not an object", self.provider_name)
            ts = require_number(entry.get("date"), f"history[{i}].date", self.provider_name)
            rate = entry.get("rate")
            if rate is None:
                # Gaps in the native series come back as null rates.
                continue
            price = require_price(rate, f"history[{i}].rate", self.provider_name)
            raw.append(PricePoint(timestamp=int(ts), price=price))

        points = downsample(raw, granularity)
        logger.debug(
            "LiveCoinWatch %s: %d native samples -> %d %s points",
            timeframe.value, len(raw), len(points), granularity.value,
        )
        return points
