"""Shared enumerations and type aliases."""

from __future__ import annotations

from enum import StrEnum

# --- Type Aliases ---

Symbol = str

# --- Enumerations ---


class ProviderKind(StrEnum):
    """Provider payload shapes understood by the adapters.

    The set is closed: every kind has exactly one adapter.
    """

    FOREX = "forex"
    HISTORY = "history"
    CHART = "chart"


class TimestampUnit(StrEnum):
    """Unit of the epoch timestamps a provider emits."""

    SECONDS = "seconds"
    MILLISECONDS = "milliseconds"

    @property
    def per_second(self) -> int:
        """How many units make up one second."""
        return 1000 if self is TimestampUnit.MILLISECONDS else 1
