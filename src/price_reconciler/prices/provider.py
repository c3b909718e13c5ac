"""Price adapter protocol and provider dispatch.

Architecture
------------
Every provider payload shape has exactly one adapter:

    RawPayload → PriceAdapter → PriceSet (single instrument)

- **PriceAdapter** is the protocol each adapter implements. Adapters are
  independent of each other and are selected by ``ProviderKind``.

- **detect_provider** infers the ``ProviderKind`` of a raw payload from its
  shape, for callers that do not already know where a payload came from.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date
from decimal import Decimal
from typing import Any, Protocol, runtime_checkable

from price_reconciler.core.config import ReconcilerConfig
from price_reconciler.core.exceptions import PayloadError
from price_reconciler.core.models import ProviderKind
from price_reconciler.prices.models import PriceSet, StockPrice, round_price


@runtime_checkable
class PriceAdapter(Protocol):
    """Transforms one provider payload into a single-instrument PriceSet.

    Parameters
    ----------
    raw_data : Any
        The raw provider payload (JSON-compatible objects). The adapter
        knows the expected shape.
    dates : Sequence[date] | None
        Dates of interest. Each one is a key of the result, empty when the
        payload has no observation for it.
    symbol : str | None
        Instrument symbol, for payloads that do not carry one.

    Returns
    -------
    PriceSet
        Every payload date and every date of interest as a key.
    """

    provider: ProviderKind

    def adapt(
        self,
        raw_data: Any,
        dates: Sequence[date] | None = None,
        symbol: str | None = None,
    ) -> PriceSet: ...


def build_adapters(config: ReconcilerConfig | None = None) -> dict[ProviderKind, PriceAdapter]:
    """Instantiate one adapter per provider kind from configuration."""
    from price_reconciler.prices.chart import ChartAdapter
    from price_reconciler.prices.forex import ForexHistoryAdapter
    from price_reconciler.prices.history import HistoryAdapter

    if config is None:
        config = ReconcilerConfig()
    settings = config.adapters
    return {
        ProviderKind.FOREX: ForexHistoryAdapter(
            timestamp_unit=settings.forex_timestamp_unit,
        ),
        ProviderKind.HISTORY: HistoryAdapter(
            timestamp_unit=settings.history_timestamp_unit,
        ),
        ProviderKind.CHART: ChartAdapter(
            timestamp_unit=settings.chart_timestamp_unit,
            symbol_delimiter=settings.symbol_delimiter,
            fill_calendar_gaps=config.reconcile.fill_calendar_gaps,
        ),
    }


def detect_provider(raw_data: Any) -> ProviderKind:
    """Infer the provider kind from a payload's shape.

    - list of records → forex history
    - mapping with ``prices`` → plain history list
    - mapping with ``chart`` (envelope) or ``timestamp`` / ``indicators`` → chart
    """
    if isinstance(raw_data, Sequence) and not isinstance(raw_data, (str, bytes)):
        return ProviderKind.FOREX
    if isinstance(raw_data, Mapping):
        if "prices" in raw_data:
            return ProviderKind.HISTORY
        if "chart" in raw_data or "timestamp" in raw_data or "indicators" in raw_data:
            return ProviderKind.CHART
    raise PayloadError(
        "Cannot determine provider from payload shape",
        context={"provider": "unknown", "reason": f"type {type(raw_data).__name__}"},
    )


def seed_price_set(dates: Sequence[date] | None) -> PriceSet:
    """An empty PriceSet keyed by the given dates of interest."""
    price_set = PriceSet()
    for price_date in dates or ():
        price_set.ensure_date(price_date)
    return price_set


def add_close(
    price_set: PriceSet,
    price_date: date,
    symbol: str,
    close: Decimal | None,
) -> bool:
    """Record a closing price, always creating the date key.

    Null closes and closes that are zero after rounding are the "no tradable
    price" sentinel (dividend and void rows) and are not stored.
    Returns True if a price was stored.
    """
    price_set.ensure_date(price_date)
    if close is None:
        return False
    rounded = round_price(close)
    if rounded == 0:
        return False
    return price_set.put(price_date, StockPrice(symbol=symbol, price=rounded))


def require_symbol(symbol: str | None, provider: ProviderKind) -> str:
    if not symbol:
        raise PayloadError(
            f"A symbol is required for {provider} payloads",
            context={"provider": str(provider), "reason": "missing symbol"},
        )
    return symbol
