"""Forex history adapter.

Parses a list of daily quote records, ``[{"date": ..., "quotes": [{"close": ...}]}]``.
The currency pair is not part of the payload, so the caller names it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date
from typing import Any

from price_reconciler.core.models import ProviderKind, TimestampUnit
from price_reconciler.prices.models import PriceSet
from price_reconciler.prices.payloads import ForexHistory, parse_payload
from price_reconciler.prices.provider import add_close, require_symbol, seed_price_set

logger = logging.getLogger(__name__)


class ForexHistoryAdapter:
    """Transforms forex history records into a PriceSet.

    Each record contributes at most one price, its first quote's close,
    keyed by the record's own date.

    Parameters
    ----------
    timestamp_unit : TimestampUnit
        Unit of numeric record dates. ISO date strings need no unit.
    """

    provider = ProviderKind.FOREX

    def __init__(self, timestamp_unit: TimestampUnit = TimestampUnit.SECONDS) -> None:
        self._unit = timestamp_unit

    def adapt(
        self,
        raw_data: Any,
        dates: Sequence[date] | None = None,
        symbol: str | None = None,
    ) -> PriceSet:
        pair = require_symbol(symbol, self.provider)
        history = parse_payload(ForexHistory, {"records": raw_data}, self.provider)

        price_set = seed_price_set(dates)
        stored = 0
        for record in history.records:
            close = record.quotes[0].close if record.quotes else None
            if add_close(price_set, record.record_date(self._unit), pair, close):
                stored += 1

        logger.debug(
            "Adapted %d forex records for %s: %d prices over %d dates",
            len(history.records),
            pair,
            stored,
            len(price_set),
        )
        return price_set
