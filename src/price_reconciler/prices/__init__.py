"""Price reconciliation engine.

Architecture
------------
Each provider payload shape has one adapter; adapted single-instrument
sets are folded into one aggregate:

    Payload → PriceAdapter → PriceSet → add_dates/add_prices → PriceSet
                                                  ↓ (optional, once)
                                             interpolate

Key abstractions:

- ``PriceSet``: date → {symbol → StockPrice}; empty dates are meaningful.
- ``StockPrice``: one symbol's price, rounded to 6 digits half away from zero.
- ``PriceAdapter``: protocol implemented by the forex, history and chart adapters.
- ``reconcile``: the fold over ``PriceSource`` payloads.
"""

from price_reconciler.prices.calendar_gaps import business_days, resolve_calendar_gaps
from price_reconciler.prices.chart import ChartAdapter, canonical_symbol
from price_reconciler.prices.forex import ForexHistoryAdapter
from price_reconciler.prices.history import HistoryAdapter
from price_reconciler.prices.interpolate import interpolate
from price_reconciler.prices.merge import add_dates, add_prices
from price_reconciler.prices.models import PricePoint, PriceSet, StockPrice, round_price
from price_reconciler.prices.provider import PriceAdapter, build_adapters, detect_provider
from price_reconciler.prices.reconcile import PriceSource, merge_source, reconcile

__all__ = [
    # Models
    "PriceSet",
    "StockPrice",
    "PricePoint",
    "round_price",
    # Adapters
    "PriceAdapter",
    "ForexHistoryAdapter",
    "HistoryAdapter",
    "ChartAdapter",
    "canonical_symbol",
    "build_adapters",
    "detect_provider",
    # Engines
    "business_days",
    "resolve_calendar_gaps",
    "add_dates",
    "add_prices",
    "interpolate",
    # Fold
    "PriceSource",
    "merge_source",
    "reconcile",
]
