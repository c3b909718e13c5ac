"""Merge engine: fold single-instrument price sets into an aggregate."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from price_reconciler.prices.models import PriceSet

logger = logging.getLogger(__name__)


def add_dates(price_set: PriceSet, dates: Iterable[date]) -> PriceSet:
    """Insert each date that is not yet a key, with no prices. Idempotent."""
    for price_date in dates:
        price_set.ensure_date(price_date)
    return price_set


def add_prices(price_set: PriceSet, other: PriceSet, symbol: str) -> PriceSet:
    """Copy ``symbol``'s prices from ``other`` into ``price_set``.

    Every date of ``other`` becomes a key of ``price_set``. Only the named
    symbol is copied, and an entry already present for it is kept. Dates
    only in ``price_set`` are untouched.
    """
    copied = 0
    for price_date, day in other.prices.items():
        price_set.ensure_date(price_date)
        stock_price = day.get(symbol)
        if stock_price is not None and price_set.put(price_date, stock_price):
            copied += 1

    logger.debug("Merged %d prices for %s across %d dates", copied, symbol, len(other))
    return price_set
