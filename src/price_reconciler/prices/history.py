"""Plain history-list adapter.

Parses ``{"prices": [{"date": <epoch>, "close": <number>}, ...]}`` for one
instrument. Event rows (dividends, splits) carry a zero or null close and
only contribute their date.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date
from typing import Any

from price_reconciler.core.models import ProviderKind, TimestampUnit
from price_reconciler.prices.models import PriceSet
from price_reconciler.prices.payloads import HistoryResponse, epoch_to_date, parse_payload
from price_reconciler.prices.provider import add_close, require_symbol, seed_price_set

logger = logging.getLogger(__name__)


class HistoryAdapter:
    """Transforms a history-list response into a PriceSet.

    Parameters
    ----------
    timestamp_unit : TimestampUnit
        Unit of the ``date`` epoch values. Default: seconds.
    """

    provider = ProviderKind.HISTORY

    def __init__(self, timestamp_unit: TimestampUnit = TimestampUnit.SECONDS) -> None:
        self._unit = timestamp_unit

    def adapt(
        self,
        raw_data: Any,
        dates: Sequence[date] | None = None,
        symbol: str | None = None,
    ) -> PriceSet:
        ticker = require_symbol(symbol, self.provider)
        response = parse_payload(HistoryResponse, raw_data, self.provider)

        price_set = seed_price_set(dates)
        dropped = 0
        for row in response.prices:
            row_date = epoch_to_date(row.date, self._unit, self.provider)
            if not add_close(price_set, row_date, ticker, row.close):
                dropped += 1

        if dropped:
            logger.debug("Skipped %d history rows without a usable close for %s", dropped, ticker)
        logger.debug(
            "Adapted %d history rows for %s over %d dates",
            len(response.prices),
            ticker,
            len(price_set),
        )
        return price_set
