"""Tests for price_reconciler.prices.calendar_gaps."""

from __future__ import annotations

from datetime import date

from price_reconciler.prices.calendar_gaps import business_days, resolve_calendar_gaps
from price_reconciler.prices.models import PriceSet, StockPrice


class TestBusinessDays:
    def test_skips_weekend(self):
        assert business_days(date(2020, 8, 28), date(2020, 9, 1)) == [
            date(2020, 8, 28),
            date(2020, 8, 31),
            date(2020, 9, 1),
        ]

    def test_single_day(self):
        assert business_days(date(2020, 8, 31), date(2020, 8, 31)) == [date(2020, 8, 31)]

    def test_weekend_only_range(self):
        assert business_days(date(2020, 8, 29), date(2020, 8, 30)) == []

    def test_reversed_range(self):
        assert business_days(date(2020, 9, 1), date(2020, 8, 28)) == []


class TestResolveCalendarGaps:
    def test_missing_business_day_added_empty(self):
        ps = PriceSet()
        ps.put(date(2020, 8, 28), StockPrice(symbol="VOD", price=1))
        ps.put(date(2020, 9, 1), StockPrice(symbol="VOD", price=2))
        resolve_calendar_gaps(ps)
        assert ps[date(2020, 8, 31)] == {}
        assert date(2020, 8, 29) not in ps
        assert date(2020, 8, 30) not in ps

    def test_existing_entries_untouched(self):
        ps = PriceSet()
        ps.put(date(2020, 8, 28), StockPrice(symbol="VOD", price=1))
        ps.put(date(2020, 8, 31), StockPrice(symbol="VOD", price=2))
        resolve_calendar_gaps(ps)
        assert ps.get(date(2020, 8, 31), "VOD").price == 2
        assert len(ps) == 2

    def test_observed_dates_bound_the_range(self):
        ps = PriceSet()
        ps.ensure_date(date(2019, 1, 1))
        resolve_calendar_gaps(ps, [date(2020, 8, 28), date(2020, 9, 1)])
        assert ps.dates() == [
            date(2019, 1, 1),
            date(2020, 8, 28),
            date(2020, 8, 31),
            date(2020, 9, 1),
        ]

    def test_weekend_endpoints_kept_but_not_synthesized(self):
        ps = PriceSet()
        ps.ensure_date(date(2020, 8, 29))
        ps.ensure_date(date(2020, 9, 6))
        resolve_calendar_gaps(ps)
        assert date(2020, 8, 30) not in ps
        assert date(2020, 9, 5) not in ps
        assert len(ps) == 2 + 5

    def test_empty_set_unchanged(self):
        ps = resolve_calendar_gaps(PriceSet())
        assert len(ps) == 0

    def test_returns_same_instance(self):
        ps = PriceSet()
        assert resolve_calendar_gaps(ps) is ps
