"""price-reconciler: reconcile multi-provider daily prices into one table."""

__version__ = "0.1.0"
