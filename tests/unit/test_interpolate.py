"""Tests for price_reconciler.prices.interpolate."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from price_reconciler.prices.interpolate import interpolate
from price_reconciler.prices.models import PriceSet, StockPrice

START = date(2024, 1, 1)


def _series(symbol: str, prices: list[float], ps: PriceSet | None = None) -> PriceSet:
    """One date per price; zero means no entry for the symbol."""
    ps = ps if ps is not None else PriceSet()
    for i, price in enumerate(prices):
        d = START + timedelta(days=i)
        ps.ensure_date(d)
        if price:
            ps.put(d, StockPrice(symbol=symbol, price=price))
    return ps


def _prices(ps: PriceSet, symbol: str) -> list[Decimal | None]:
    return [sp.price if (sp := ps.get(d, symbol)) else None for d in ps.dates()]


class TestInterpolate:
    def test_two_point_gap(self):
        ps = interpolate(_series("X", [10, 0, 0, 40]), ["X"])
        assert _prices(ps, "X") == [Decimal(10), Decimal(20), Decimal(30), Decimal(40)]

    def test_single_point_gap(self):
        ps = interpolate(_series("X", [10, 0, 20]), ["X"])
        assert _prices(ps, "X")[1] == Decimal(15)

    def test_leading_and_trailing_zero_unfilled(self):
        ps = interpolate(_series("X", [0, 10, 0, 30, 0]), ["X"])
        assert _prices(ps, "X") == [None, Decimal(10), Decimal(20), Decimal(30), None]

    def test_disjoint_gaps_use_own_anchors(self):
        ps = interpolate(_series("X", [10, 0, 20, 0, 0, 50]), ["X"])
        assert _prices(ps, "X") == [
            Decimal(10),
            Decimal(15),
            Decimal(20),
            Decimal(30),
            Decimal(40),
            Decimal(50),
        ]

    def test_uneven_step_rounded(self):
        ps = interpolate(_series("X", [10, 0, 0, 20]), ["X"])
        assert _prices(ps, "X")[1:3] == [Decimal("13.333333"), Decimal("16.666667")]

    def test_fewer_than_three_points(self):
        ps = interpolate(_series("X", [10, 0]), ["X"])
        assert _prices(ps, "X") == [Decimal(10), None]

    def test_all_zero_produces_nothing(self):
        ps = interpolate(_series("X", [0, 0, 0]), ["X"])
        assert ps.symbols() == []

    def test_all_positive_unchanged(self):
        ps = interpolate(_series("X", [1, 2, 3]), ["X"])
        assert _prices(ps, "X") == [Decimal(1), Decimal(2), Decimal(3)]

    def test_position_not_elapsed_time(self):
        ps = PriceSet()
        ps.put(date(2024, 1, 1), StockPrice(symbol="X", price=10))
        ps.ensure_date(date(2024, 1, 2))
        ps.put(date(2024, 3, 1), StockPrice(symbol="X", price=20))
        interpolate(ps, ["X"])
        assert ps.get(date(2024, 1, 2), "X").price == Decimal(15)

    def test_gaps_defined_by_other_symbols_dates(self):
        ps = _series("Y", [1, 2, 3, 4])
        ps.put(START, StockPrice(symbol="X", price=10))
        ps.put(START + timedelta(days=3), StockPrice(symbol="X", price=40))
        interpolate(ps, ["X"])
        assert _prices(ps, "X") == [Decimal(10), Decimal(20), Decimal(30), Decimal(40)]
        assert _prices(ps, "Y") == [Decimal(1), Decimal(2), Decimal(3), Decimal(4)]

    def test_only_named_symbols(self):
        ps = _series("X", [10, 0, 30])
        _series("Y", [1, 0, 3], ps)
        interpolate(ps, ["X"])
        assert ps.get(START + timedelta(days=1), "Y") is None

    def test_multiple_symbols(self):
        ps = _series("X", [10, 0, 30])
        _series("Y", [1, 0, 3], ps)
        interpolate(ps, ["X", "Y"])
        assert ps.get(START + timedelta(days=1), "X").price == Decimal(20)
        assert ps.get(START + timedelta(days=1), "Y").price == Decimal(2)

    def test_returns_same_instance(self):
        ps = _series("X", [10, 0, 30])
        assert interpolate(ps, ["X"]) is ps

    def test_unknown_symbol_is_noop(self):
        ps = interpolate(_series("X", [10, 0, 30]), ["NOPE"])
        assert ps.symbols() == ["X"]
