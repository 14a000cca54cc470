from decimal import Decimal

from discounts.factories import DiscountStrategyFactory
from discounts.models import Discount
from discounts.strategies import FlatDiscountStrategy, PercentDiscountStrategy


class TestDiscountStrategies:
    def test_percent_of_subtotal(self):
        assert PercentDiscountStrategy().apply(10000, Decimal("10")) == 1000

    def test_flat_ignores_subtotal(self):
        assert FlatDiscountStrategy().apply(10000, Decimal("5.00")) == 500
        assert FlatDiscountStrategy().apply(0, Decimal("5.00")) == 500


class TestDiscountStrategyFactory:
    def test_known_types(self):
        assert isinstance(DiscountStrategyFactory.get_strategy(Discount.DiscountType.PERCENT), PercentDiscountStrategy)
        assert isinstance(DiscountStrategyFactory.get_strategy(Discount.DiscountType.FLAT), FlatDiscountStrategy)

    def test_unknown_type_is_flat(self):
        assert isinstance(DiscountStrategyFactory.get_strategy("BOGO"), FlatDiscountStrategy)
