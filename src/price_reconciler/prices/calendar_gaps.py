"""Calendar gap resolver.

Business days (Monday to Friday) missing from a provider's own date range
are treated as suspected non-trading days and surfaced as empty entries.
The heuristic knows nothing about regional holiday calendars, so an
instrument trading on a different calendar gets extra empty days.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

import pandas as pd

from price_reconciler.prices.models import PriceSet

logger = logging.getLogger(__name__)


def business_days(start: date, end: date) -> list[date]:
    """Every Monday-Friday date in the inclusive range ``[start, end]``."""
    if end < start:
        return []
    return [ts.date() for ts in pd.bdate_range(start=start, end=end)]


def resolve_calendar_gaps(
    price_set: PriceSet,
    observed: Iterable[date] | None = None,
) -> PriceSet:
    """Add an empty entry for each business day absent between min and max.

    Parameters
    ----------
    price_set : PriceSet
        Mutated in place and returned.
    observed : Iterable[date] | None
        Dates that bound the range. Defaults to the set's own keys.
    """
    bounds = list(observed) if observed is not None else price_set.dates()
    if not bounds:
        return price_set

    synthesized = 0
    for day in business_days(min(bounds), max(bounds)):
        if day not in price_set:
            price_set.ensure_date(day)
            synthesized += 1

    if synthesized:
        logger.debug(
            "Synthesized %d empty business days between %s and %s",
            synthesized,
            min(bounds),
            max(bounds),
        )
    return price_set
