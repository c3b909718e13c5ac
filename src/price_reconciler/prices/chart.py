"""Chart-result adapter.

Parses a chart API result: a ``timestamp`` array, a parallel
``indicators.quote[0].close`` array and a ``meta.symbol`` field. Accepts
either a bare result or the full ``{"chart": {"result": [...]}}`` envelope.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any

from price_reconciler.core.exceptions import PayloadError
from price_reconciler.core.models import ProviderKind, TimestampUnit
from price_reconciler.prices.calendar_gaps import resolve_calendar_gaps
from price_reconciler.prices.models import PriceSet
from price_reconciler.prices.payloads import (
    ChartResponse,
    ChartResult,
    epoch_to_date,
    parse_payload,
)
from price_reconciler.prices.provider import add_close, seed_price_set

logger = logging.getLogger(__name__)


def canonical_symbol(raw_symbol: str, delimiter: str = ".") -> str:
    """Strip an exchange-qualifier suffix: ``"VOD.L"`` -> ``"VOD"``."""
    return raw_symbol.split(delimiter, 1)[0]


class ChartAdapter:
    """Transforms a chart result into a PriceSet.

    When no dates of interest are given, business days missing between the
    first and last timestamp are added as empty entries.

    Parameters
    ----------
    timestamp_unit : TimestampUnit
        Unit of the ``timestamp`` values. Default: seconds.
    symbol_delimiter : str
        Everything from the first occurrence of this character onward is
        dropped from ``meta.symbol``.
    fill_calendar_gaps : bool
        Disable to skip business-day gap synthesis entirely.
    """

    provider = ProviderKind.CHART

    def __init__(
        self,
        timestamp_unit: TimestampUnit = TimestampUnit.SECONDS,
        symbol_delimiter: str = ".",
        fill_calendar_gaps: bool = True,
    ) -> None:
        self._unit = timestamp_unit
        self._delimiter = symbol_delimiter
        self._fill_gaps = fill_calendar_gaps

    def _unwrap(self, raw_data: Any) -> ChartResult:
        if isinstance(raw_data, Mapping) and "chart" in raw_data:
            envelope = parse_payload(ChartResponse, raw_data, self.provider).chart
            if envelope.error:
                raise PayloadError(
                    f"Chart response carries an error: {envelope.error.get('description')}",
                    context={"provider": str(self.provider), "reason": str(envelope.error)},
                )
            if not envelope.result:
                raise PayloadError(
                    "Chart response has no result",
                    context={"provider": str(self.provider), "reason": "empty result"},
                )
            return envelope.result[0]
        return parse_payload(ChartResult, raw_data, self.provider)

    def _symbol(self, result: ChartResult, hint: str | None) -> str:
        raw_symbol = (result.meta.symbol or "").strip() or (hint or "").strip()
        if not raw_symbol:
            raise PayloadError(
                "Chart result has no meta.symbol and no symbol was supplied",
                context={"provider": str(self.provider), "reason": "missing symbol"},
            )
        ticker = canonical_symbol(raw_symbol, self._delimiter).strip()
        if not ticker:
            raise PayloadError(
                f"Chart symbol {raw_symbol!r} has nothing before the {self._delimiter!r} suffix",
                context={"provider": str(self.provider), "reason": "empty canonical symbol"},
            )
        return ticker

    def adapt(
        self,
        raw_data: Any,
        dates: Sequence[date] | None = None,
        symbol: str | None = None,
    ) -> PriceSet:
        result = self._unwrap(raw_data)
        ticker = self._symbol(result, symbol)

        price_set = seed_price_set(dates)
        observed: list[date] = []
        for ts, close in zip(result.timestamp, result.closes):
            price_date = epoch_to_date(ts, self._unit, self.provider)
            observed.append(price_date)
            add_close(price_set, price_date, ticker, close)

        if not dates and self._fill_gaps:
            resolve_calendar_gaps(price_set, observed)

        logger.debug(
            "Adapted %d chart points for %s over %d dates",
            len(result.timestamp),
            ticker,
            len(price_set),
        )
        return price_set
