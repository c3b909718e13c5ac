"""price_reconciler.core — Foundation types, config, and exceptions."""

from price_reconciler.core.config import (
    AdaptersConfig,
    ReconcileConfig,
    ReconcilerConfig,
    load_config,
)
from price_reconciler.core.exceptions import (
    ConfigError,
    PayloadError,
    PriceReconcilerError,
    ReconciliationError,
)
from price_reconciler.core.models import ProviderKind, Symbol, TimestampUnit

__all__ = [
    # Type aliases
    "Symbol",
    # Enums
    "ProviderKind",
    "TimestampUnit",
    # Config
    "ReconcilerConfig",
    "AdaptersConfig",
    "ReconcileConfig",
    "load_config",
    # Exceptions
    "PriceReconcilerError",
    "ConfigError",
    "PayloadError",
    "ReconciliationError",
]
