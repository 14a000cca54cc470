"""
Orders services package.

- OrderService: order lifecycle and every mutation of items, discounts and charges
- OrderCalculationService: the ledger recompute that closes every mutation
"""

from .calculation_service import OrderCalculationService
from .order_service import OrderService

__all__ = [
    "OrderService",
    "OrderCalculationService",
]
