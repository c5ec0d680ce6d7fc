"""
Chart timeframes and their fixed (span, granularity) lookup table.

The table is not derived: each timeframe maps to exactly one pair.
Unknown values are rejected by `parse_timeframe` in strict mode; permissive
mode maps them to the 60d/daily default.
"""

from __future__ import annotations

import enum
import logging
from typing import Dict, NamedTuple, Union

from .core.errors import TimeframeError

logger = logging.getLogger(__name__)


class Timeframe(enum.Enum):
    """Supported chart windows."""

    D7 = "7d"
    D60 = "60d"
    Y1 = "1y"
    Y5 = "5y"


class Granularity(enum.Enum):
    """Sampling granularity of a series."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class TimeframeParams(NamedTuple):
    span_days: int
    granularity: Granularity


TIMEFRAME_PARAMS: Dict[Timeframe, TimeframeParams] = {
    Timeframe.D7: TimeframeParams(7, Granularity.DAILY),
    Timeframe.D60: TimeframeParams(60, Granularity.DAILY),
    Timeframe.Y1: TimeframeParams(365, Granularity.WEEKLY),
    Timeframe.Y5: TimeframeParams(1825, Granularity.MONTHLY),
}

DEFAULT_TIMEFRAME = Timeframe.D60


def parse_timeframe(value: Union[Timeframe, str], *, strict: bool = True) -> Timeframe:
    """
    Coerce a Timeframe or its string value ("7d", "60d", "1y", "5y").

    strict=True raises TimeframeError for anything else; strict=False logs and
    returns DEFAULT_TIMEFRAME (60d).
    """
    if isinstance(value, Timeframe):
        return value
    try:
        return Timeframe(str(value).strip().lower())
    except ValueError:
        if strict:
            allowed = [t.value for t in Timeframe]
            raise TimeframeError(
                f"Unknown timeframe {value!r}. Allowed: {allowed}"
            ) from None
        logger.warning(
            "Unknown timeframe %r, falling back to %s", value, DEFAULT_TIMEFRAME.value
        )
        return DEFAULT_TIMEFRAME


def timeframe_params(value: Union[Timeframe, str], *, strict: bool = True) -> TimeframeParams:
    """Return (span_days, granularity) for a timeframe."""
    return TIMEFRAME_PARAMS[parse_timeframe(value, strict=strict)]
