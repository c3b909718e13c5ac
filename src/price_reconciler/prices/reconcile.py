"""Reconciliation fold: adapt each source, merge it, optionally interpolate.

    reduce(sources, adapt-then-merge, PriceSet(dates of interest))

The aggregate is owned by the fold, and sources are merged strictly in
the order given.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from functools import partial, reduce
from typing import Any

from price_reconciler.core.config import ReconcilerConfig
from price_reconciler.core.exceptions import ReconciliationError
from price_reconciler.core.models import ProviderKind
from price_reconciler.prices.interpolate import interpolate
from price_reconciler.prices.merge import add_dates, add_prices
from price_reconciler.prices.models import PriceSet
from price_reconciler.prices.provider import PriceAdapter, build_adapters, seed_price_set

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceSource:
    """One provider payload for one instrument."""

    provider: ProviderKind
    payload: Any
    symbol: str | None = None


def merge_source(
    aggregate: PriceSet,
    source: PriceSource,
    dates: Sequence[date] | None,
    adapters: Mapping[ProviderKind, PriceAdapter],
) -> PriceSet:
    """Adapt a single source and fold it into ``aggregate``."""
    adapter = adapters.get(source.provider)
    if adapter is None:
        raise ReconciliationError(
            f"No adapter registered for provider {source.provider!r}",
            context={"stage": "adapt"},
        )

    adapted = adapter.adapt(source.payload, dates, source.symbol)
    add_dates(aggregate, adapted.prices)
    symbols = adapted.symbols()
    for symbol in symbols:
        add_prices(aggregate, adapted, symbol)

    logger.info(
        "Merged %s source (%s) over %d dates",
        source.provider,
        ", ".join(symbols) or "no prices",
        len(adapted),
    )
    return aggregate


def reconcile(
    sources: Iterable[PriceSource],
    dates: Sequence[date] | None = None,
    interpolate_gaps: bool = False,
    config: ReconcilerConfig | None = None,
) -> PriceSet:
    """Build one multi-instrument PriceSet from provider payloads.

    Parameters
    ----------
    sources : Iterable[PriceSource]
        Payloads to merge, one instrument each.
    dates : Sequence[date] | None
        Dates of interest. Always present in the result; passed on to
        every adapter, which disables calendar-gap synthesis.
    interpolate_gaps : bool
        Run interpolation once over every symbol of the merged set.
    config : ReconcilerConfig | None
        Adapter settings. Defaults apply when None.
    """
    adapters = build_adapters(config)
    step = partial(_fold_step, dates=dates, adapters=adapters)
    aggregate = reduce(step, sources, seed_price_set(dates))

    if interpolate_gaps:
        interpolate(aggregate, aggregate.symbols())
    return aggregate


def _fold_step(
    aggregate: PriceSet,
    source: PriceSource,
    *,
    dates: Sequence[date] | None,
    adapters: Mapping[ProviderKind, PriceAdapter],
) -> PriceSet:
    return merge_source(aggregate, source, dates, adapters)
