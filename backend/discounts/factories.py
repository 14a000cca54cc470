from .models import Discount
from .strategies import (
    DiscountStrategy,
    PercentDiscountStrategy,
    FlatDiscountStrategy,
)


class DiscountStrategyFactory:
    """
    Factory for creating a discount strategy based on the discount's type.
    """

    _strategies = {
        Discount.DiscountType.PERCENT: PercentDiscountStrategy,
        Discount.DiscountType.FLAT: FlatDiscountStrategy,
    }

    @staticmethod
    def get_strategy(discount_type: str) -> DiscountStrategy:
        """
        Selects and returns the appropriate strategy instance.

        Unknown types fall back to the flat strategy, matching how the ledger
        treats any non-percentage definition.
        """
        strategy_class = DiscountStrategyFactory._strategies.get(
            discount_type, FlatDiscountStrategy
        )
        return strategy_class()
