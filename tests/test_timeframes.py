"""
Tests for the fixed timeframe -> (span, granularity) lookup table and
strict/permissive handling of unknown values.
"""

from __future__ import annotations

import pytest

from btc_price_feed.core.errors import TimeframeError
from btc_price_feed.timeframes import (
    DEFAULT_TIMEFRAME,
    TIMEFRAME_PARAMS,
    Granularity,
    Timeframe,
    parse_timeframe,
    timeframe_params,
)


@pytest.mark.parametrize(
    "value,span,granularity",
    [
        ("7d", 7, Granularity.DAILY),
        ("60d", 60, Granularity.DAILY),
        ("1y", 365, Granularity.WEEKLY),
        ("5y", 1825, Granularity.MONTHLY),
    ],
)
def test_documented_pairs(value, span, granularity):
    params = timeframe_params(value)
    assert params.span_days == span
    assert params.granularity is granularity
    assert tuple(params) == (span, granularity)


def test_table_covers_every_timeframe():
    assert set(TIMEFRAME_PARAMS) == set(Timeframe)


def test_enum_and_string_are_equivalent():
    assert timeframe_params(Timeframe.Y1) == timeframe_params("1y")
    assert parse_timeframe(" 5Y ") is Timeframe.Y5


@pytest.mark.parametrize("bad", ["", "30d", "1w", "max", None, 7])
def test_strict_rejects_unknown(bad):
    with pytest.raises(TimeframeError, match="Unknown timeframe"):
        parse_timeframe(bad)


def test_timeframe_error_is_value_error():
    with pytest.raises(ValueError):
        timeframe_params("2y")


def test_permissive_falls_back_to_60d_daily(caplog):
    assert DEFAULT_TIMEFRAME is Timeframe.D60
    with caplog.at_level("WARNING", logger="btc_price_feed.timeframes"):
        params = timeframe_params("30d", strict=False)
    assert params == (60, Granularity.DAILY)
    assert "Unknown timeframe" in caplog.text


def test_permissive_keeps_known_values():
    assert parse_timeframe("7d", strict=False) is Timeframe.D7
