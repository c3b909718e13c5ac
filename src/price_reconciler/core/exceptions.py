"""Custom exception hierarchy for price-reconciler."""

from typing import Any


class PriceReconcilerError(Exception):
    """Base exception for all price-reconciler errors.

    All exceptions carry an optional `context` dict for structured error
    metadata that can be logged or serialized without parsing the message.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class ConfigError(PriceReconcilerError):
    """Invalid or missing configuration.

    Raised by load_config() during startup. Should be treated as fatal.

    Context keys:
        field: str — the config field that failed validation
        value: Any — the invalid value
    """


class PayloadError(PriceReconcilerError):
    """A provider payload is malformed.

    Missing required fields, non-numeric prices or dates, mismatched
    timestamp/close arrays, or an unrecognized shape. This is a contract
    violation by whoever retrieved the payload, not a data condition.

    Policy: raise immediately. Never substitute defaults.

    Context keys:
        provider: str — "forex", "history" or "chart"
        reason: str — what was wrong with the payload
    """


class ReconciliationError(PriceReconcilerError):
    """Folding adapted price sets into an aggregate failed.

    Policy: raise immediately. A partially merged price set is misleading.

    Context keys:
        stage: str — the fold step that failed, e.g. "adapt"
    """
