"""Canonical price model shared by adapters, merge, and interpolation."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

import pandas as pd
from pydantic import BaseModel, ConfigDict, field_validator

PRICE_PRECISION = Decimal("0.000001")
ZERO = Decimal(0)


def round_price(value: Any) -> Decimal:
    """Round a raw price to 6 fractional digits, half away from zero.

    Floats go through ``str()`` so their binary representation never
    influences the rounding.
    """
    if isinstance(value, bool):
        raise ValueError(f"price must be numeric, got {value!r}")
    try:
        if isinstance(value, float):
            raw = Decimal(str(value))
        elif isinstance(value, (int, str, Decimal)):
            raw = Decimal(value)
        else:
            raise ValueError(f"price must be numeric, got {value!r}")
    except InvalidOperation as e:
        raise ValueError(f"price must be numeric, got {value!r}") from e
    if not raw.is_finite():
        raise ValueError(f"price must be finite, got {value!r}")
    return raw.quantize(PRICE_PRECISION, rounding=ROUND_HALF_UP)


class StockPrice(BaseModel):
    """One instrument's price on one date.

    The price is always stored rounded to 6 fractional digits. Zero is the
    "no tradable closing price" sentinel; adapters never build a StockPrice
    from it.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    price: Decimal

    @field_validator("symbol")
    @classmethod
    def symbol_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("symbol must not be empty")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def round_to_precision(cls, v: Any) -> Decimal:
        return round_price(v)


@dataclass(frozen=True)
class PricePoint:
    """A single (date, price) step of one symbol's chronological series."""

    date: date
    price: Decimal


@dataclass
class PriceSet:
    """Date-indexed price table: date -> {symbol -> StockPrice}.

    A date key with an empty mapping means the date was examined and had no
    trade data, which is distinct from the date being absent.
    """

    prices: dict[date, dict[str, StockPrice]] = field(default_factory=dict)

    def __contains__(self, item: object) -> bool:
        return item in self.prices

    def __len__(self) -> int:
        return len(self.prices)

    def __iter__(self) -> Iterator[date]:
        return iter(self.dates())

    def __getitem__(self, price_date: date) -> dict[str, StockPrice]:
        return self.prices[price_date]

    def dates(self) -> list[date]:
        """All date keys in chronological order."""
        return sorted(self.prices)

    def symbols(self) -> list[str]:
        """Every symbol with at least one price, sorted."""
        return sorted({s for day in self.prices.values() for s in day})

    def get(self, price_date: date, symbol: str) -> StockPrice | None:
        return self.prices.get(price_date, {}).get(symbol)

    def ensure_date(self, price_date: date) -> dict[str, StockPrice]:
        """Return the price mapping for a date, creating it empty if needed."""
        return self.prices.setdefault(price_date, {})

    def put(self, price_date: date, price: StockPrice) -> bool:
        """Store a price unless the symbol already has one on that date.

        Returns True if the price was stored.
        """
        day = self.ensure_date(price_date)
        if price.symbol in day:
            return False
        day[price.symbol] = price
        return True

    def series(self, symbol: str) -> list[PricePoint]:
        """Chronological points for one symbol, zero where it has no price."""
        points = []
        for price_date in self.dates():
            stock_price = self.prices[price_date].get(symbol)
            points.append(
                PricePoint(
                    date=price_date,
                    price=stock_price.price if stock_price is not None else ZERO,
                )
            )
        return points

    def to_frame(self) -> pd.DataFrame:
        """Pivot into a DataFrame: DatetimeIndex rows, one column per symbol.

        Missing prices are NaN; dates without any price are kept as all-NaN rows.
        """
        dates = self.dates()
        symbols = self.symbols()
        rows = []
        for price_date in dates:
            day = self.prices[price_date]
            rows.append(
                [float(day[s].price) if s in day else math.nan for s in symbols]
            )
        return pd.DataFrame(
            rows,
            index=pd.DatetimeIndex(dates, name="date"),
            columns=symbols,
            dtype=float,
        )
