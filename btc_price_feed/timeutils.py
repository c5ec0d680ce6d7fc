"""
Single source for "now". Supports deterministic mode for tests via
BTC_PRICE_FEED_DETERMINISTIC_TIME (epoch seconds, e.g. 1767225600).
"""

from __future__ import annotations

import os
import time


def now_seconds() -> int:
    """
    Return the current epoch time in whole seconds.
    If env BTC_PRICE_FEED_DETERMINISTIC_TIME is set, return that value instead.
    """
    fixed = os.environ.get("BTC_PRICE_FEED_DETERMINISTIC_TIME", "").strip()
    if fixed:
        return int(fixed)
    return int(time.time())


def now_ms() -> int:
    fixed = os.environ.get("BTC_PRICE_FEED_DETERMINISTIC_TIME", "").strip()
    if fixed:
        return int(fixed) * 1000
    return int(time.time() * 1000)
