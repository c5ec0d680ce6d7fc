"""Percentage change over a price series. Pure functions, no I/O."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .providers.base import PricePoint


def percent_change(first_price: float, last_price: float) -> float:
    """
    Percentage change from first_price to last_price.

    Returns 0.0 when first_price is zero or negative.
    """
    if first_price > 0:
        return (last_price - first_price) / first_price * 100
    return 0.0


def series_change(points: Sequence[PricePoint]) -> float:
    """percent_change between the first and last point; 0.0 for an empty series."""
    if not points:
        return 0.0
    return percent_change(points[0].price, points[-1].price)
