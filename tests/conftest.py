"""Shared pytest fixtures for price-reconciler."""

from datetime import date, datetime, timezone

import pytest


def _epoch(d: date) -> int:
    return int(datetime(d.year, d.month, d.day, tzinfo=timezone.utc).timestamp())


FRIDAY = date(2020, 8, 28)
MONDAY = date(2020, 8, 31)
TUESDAY = date(2020, 9, 1)


@pytest.fixture
def epoch():
    """Convert a date to midnight-UTC epoch seconds."""
    return _epoch


@pytest.fixture
def chart_payload() -> dict:
    """Chart result for VOD.L trading Friday and Tuesday around a bank holiday."""
    return {
        "meta": {
            "currency": "GBp",
            "symbol": "VOD.L",
            "exchangeName": "LSE",
            "instrumentType": "EQUITY",
        },
        "timestamp": [_epoch(FRIDAY) + 28800, _epoch(TUESDAY) + 28800],
        "indicators": {
            "quote": [
                {
                    "open": [112.1, 113.0],
                    "close": [112.5, 114.5],
                    "volume": [52000000, 48000000],
                }
            ],
        },
    }


@pytest.fixture
def history_payload() -> dict:
    """History list for BP with a trailing dividend event row."""
    return {
        "prices": [
            {"date": _epoch(FRIDAY), "close": 2.95},
            {"date": _epoch(MONDAY), "close": 2.97},
            {"date": _epoch(TUESDAY), "close": 2.99},
            {"date": _epoch(TUESDAY), "amount": 0.0525, "type": "DIVIDEND"},
        ]
    }


@pytest.fixture
def forex_payload() -> list[dict]:
    """Forex history records for GBPUSD."""
    return [
        {
            "date": "2020-08-28",
            "quotes": [{"base_currency": "GBP", "quote_currency": "USD", "close": 1.33475}],
        },
        {
            "date": "2020-08-31",
            "quotes": [{"base_currency": "GBP", "quote_currency": "USD", "close": 1.33701}],
        },
        {
            "date": "2020-09-01",
            "quotes": [{"base_currency": "GBP", "quote_currency": "USD", "close": 1.34266}],
        },
    ]
