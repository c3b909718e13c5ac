"""Pydantic schemas for the raw provider payloads.

Adapters validate every payload against these models before touching it,
so a malformed response fails fast with a ``PayloadError`` instead of
producing a quietly wrong price set.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Annotated, Any, TypeVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    FiniteFloat,
    ValidationError,
    field_validator,
    model_validator,
)

from price_reconciler.core.exceptions import PayloadError
from price_reconciler.core.models import ProviderKind, TimestampUnit

_EPOCH = date(1970, 1, 1)
_SECONDS_PER_DAY = 86400


def _parse_decimal(v: Any) -> Any:
    if isinstance(v, bool):
        raise ValueError(f"expected a number, got {v!r}")
    if isinstance(v, float):
        return Decimal(str(v))
    return v


def _reject_bool(v: Any) -> Any:
    if isinstance(v, bool):
        raise ValueError(f"expected a timestamp, got {v!r}")
    return v


RawPrice = Annotated[Decimal, BeforeValidator(_parse_decimal)]
EpochTimestamp = Annotated[int | FiniteFloat, BeforeValidator(_reject_bool)]


def epoch_to_date(
    value: int | float,
    unit: TimestampUnit = TimestampUnit.SECONDS,
    provider: ProviderKind | None = None,
) -> date:
    """Convert an epoch timestamp to its UTC calendar date.

    The timestamp is first scaled to seconds, then truncated to whole days.
    Raises PayloadError when the result falls outside the representable
    date range, usually a sign the configured unit is wrong.
    """
    seconds = value / unit.per_second if unit.per_second != 1 else value
    try:
        return _EPOCH + timedelta(days=int(seconds // _SECONDS_PER_DAY))
    except (OverflowError, ValueError) as e:
        raise PayloadError(
            f"Timestamp {value!r} ({unit}) is outside the supported date range",
            context={"provider": str(provider) if provider else None, "reason": str(e)},
        ) from e


# --- Forex history ---


class ForexQuote(BaseModel):
    model_config = ConfigDict(frozen=True)

    close: RawPrice


class ForexRecord(BaseModel):
    """One day of a forex history response: ``{date, quotes: [...]}``."""

    model_config = ConfigDict(frozen=True)

    date: date | EpochTimestamp
    quotes: list[ForexQuote] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        if isinstance(v, str):
            try:
                v = datetime.fromisoformat(v)
            except ValueError as e:
                raise ValueError(f"unparseable date {v!r}") from e
        if isinstance(v, datetime):
            if v.tzinfo is not None:
                v = v.astimezone(timezone.utc)
            return v.date()
        return v

    def record_date(self, unit: TimestampUnit) -> date:
        if isinstance(self.date, date):
            return self.date
        return epoch_to_date(self.date, unit, ProviderKind.FOREX)


class ForexHistory(BaseModel):
    model_config = ConfigDict(frozen=True)

    records: list[ForexRecord]


# --- Plain history list ---


class HistoryRow(BaseModel):
    """One row of a history list. A null close marks a non-price event row."""

    model_config = ConfigDict(frozen=True)

    date: EpochTimestamp
    close: RawPrice | None = None


class HistoryResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    prices: list[HistoryRow]


# --- Chart result ---


class ChartMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str | None = None


class ChartQuote(BaseModel):
    model_config = ConfigDict(frozen=True)

    close: list[RawPrice | None] = Field(default_factory=list)


class ChartIndicators(BaseModel):
    model_config = ConfigDict(frozen=True)

    quote: list[ChartQuote] = Field(default_factory=lambda: [ChartQuote()])

    @field_validator("quote")
    @classmethod
    def quote_not_empty(cls, v: list[ChartQuote]) -> list[ChartQuote]:
        if not v:
            raise ValueError("indicators.quote must contain at least one entry")
        return v


class ChartResult(BaseModel):
    """A single ``chart.result[n]`` object: parallel timestamps and closes."""

    model_config = ConfigDict(frozen=True)

    meta: ChartMeta = ChartMeta()
    timestamp: list[EpochTimestamp] = Field(default_factory=list)
    indicators: ChartIndicators = ChartIndicators()

    @model_validator(mode="after")
    def closes_parallel_to_timestamps(self) -> ChartResult:
        closes = self.closes
        if len(closes) != len(self.timestamp):
            raise ValueError(
                f"timestamp ({len(self.timestamp)}) and close ({len(closes)}) "
                "arrays must be the same length"
            )
        return self

    @property
    def closes(self) -> list[Decimal | None]:
        return self.indicators.quote[0].close


class ChartEnvelope(BaseModel):
    model_config = ConfigDict(frozen=True)

    result: list[ChartResult] | None = None
    error: dict[str, Any] | None = None


class ChartResponse(BaseModel):
    """Full chart endpoint response: ``{"chart": {"result": [...], "error": ...}}``."""

    model_config = ConfigDict(frozen=True)

    chart: ChartEnvelope


_M = TypeVar("_M", bound=BaseModel)


def parse_payload(model: type[_M], raw: Any, provider: ProviderKind) -> _M:
    """Validate a raw payload, re-raising validation failures as PayloadError."""
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise PayloadError(
            f"Malformed {provider} payload: {e.error_count()} validation error(s)",
            context={"provider": str(provider), "reason": str(e)},
        ) from e
