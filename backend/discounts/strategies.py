from abc import ABC, abstractmethod
from decimal import Decimal

from payments.money import percentage_of_minor, to_minor


class DiscountStrategy(ABC):
    """
    The interface for a discount strategy.

    Strategies work on integer minor units so that the ledger can sum their
    results without any float or rounding drift.
    """

    @abstractmethod
    def apply(self, subtotal_minor: int, value: Decimal, currency: str = "USD") -> int:
        pass


class PercentDiscountStrategy(DiscountStrategy):
    """Takes a percentage of the order subtotal."""

    def apply(self, subtotal_minor: int, value: Decimal, currency: str = "USD") -> int:
        return percentage_of_minor(subtotal_minor, value)


class FlatDiscountStrategy(DiscountStrategy):
    """A fixed amount off the order, independent of its subtotal."""

    def apply(self, subtotal_minor: int, value: Decimal, currency: str = "USD") -> int:
        return to_minor(currency, value)
