"""
Tests for the percentage change calculator.
"""

from __future__ import annotations

import pytest

from btc_price_feed.change import percent_change, series_change
from btc_price_feed.providers.base import PricePoint


@pytest.mark.parametrize("last", [0.0, 1.0, 150.0, -5.0, 1e9])
def test_zero_first_price_gives_zero(last):
    assert percent_change(0, last) == 0


def test_negative_first_price_gives_zero():
    assert percent_change(-100.0, 50.0) == 0


def test_rise():
    assert percent_change(100, 150) == 50


def test_flat():
    assert percent_change(100, 100) == 0


def test_fall():
    assert percent_change(100, 50) == -50


def test_seven_day_scenario():
    assert percent_change(20_000.0, 21_000.0) == pytest.approx(5.0)


def test_deterministic():
    assert percent_change(123.45, 678.9) == percent_change(123.45, 678.9)


def test_series_change_uses_endpoints_only():
    points = [PricePoint(1, 100.0), PricePoint(2, 999.0), PricePoint(3, 110.0)]
    assert series_change(points) == pytest.approx(10.0)


def test_series_change_empty():
    assert series_change([]) == 0


def test_series_change_single_point():
    assert series_change([PricePoint(1, 100.0)]) == 0
