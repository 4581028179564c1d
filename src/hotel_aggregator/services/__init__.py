"""Supplier clients and aggregation services."""

from .aggregator import HotelAggregator
from .retry import RetryPolicy, retry_async
from .supplier_client import SupplierClient, SupplierFetchError

__all__ = [
    "HotelAggregator",
    "RetryPolicy",
    "SupplierClient",
    "SupplierFetchError",
    "retry_async",
]
