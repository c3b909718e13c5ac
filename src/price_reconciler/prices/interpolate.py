"""Interpolation engine: fill internal gaps in a symbol's price series.

Gaps are filled linearly by position in the date-ordered series, not by
elapsed calendar time. Leading and trailing gaps are never extrapolated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from price_reconciler.prices.models import PricePoint, PriceSet, StockPrice

logger = logging.getLogger(__name__)


def interpolate(price_set: PriceSet, symbols: Iterable[str]) -> PriceSet:
    """Fill zero runs bounded by positive prices, for each symbol.

    Mutates and returns ``price_set``. Interpolated values are computed from
    original observations only and never replace an existing entry, but a
    second call would use them as anchors: call once per completed set.
    """
    for symbol in symbols:
        filled = _interpolate_points(price_set.series(symbol))
        for point in filled:
            price_set.put(point.date, StockPrice(symbol=symbol, price=point.price))
        logger.debug("Interpolated %d prices for %s", len(filled), symbol)
    return price_set


def _interpolate_points(points: list[PricePoint]) -> list[PricePoint]:
    """New points for every interior zero that has positive anchors on both sides."""
    # Index of the nearest positive point at or before / at or after each position
    last_before: list[int | None] = []
    latest = None
    for i, point in enumerate(points):
        if point.price > 0:
            latest = i
        last_before.append(latest)

    first_after: list[int | None] = [None] * len(points)
    upcoming = None
    for i in range(len(points) - 1, -1, -1):
        if points[i].price > 0:
            upcoming = i
        first_after[i] = upcoming

    filled = []
    for i in range(1, len(points) - 1):
        if points[i].price != 0:
            continue
        before, after = last_before[i - 1], first_after[i + 1]
        if before is None or after is None:
            continue
        gap = after - before - 1
        step = (points[after].price - points[before].price) / (gap + 1)
        filled.append(
            PricePoint(date=points[i].date, price=points[before].price + step * (i - before))
        )
    return filled
