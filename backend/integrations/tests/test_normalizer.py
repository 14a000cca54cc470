"""
External Order Normalizer Tests

These tests verify field aliasing, the synthetic id fallback and the
order-type mapping. The catalog is replaced by an in-memory matcher.
"""
import pytest
from decimal import Decimal
from types import SimpleNamespace

from integrations.services.matcher import ItemMatcher
from integrations.services.normalizer import (
    ExternalOrderNormalizer,
    first_value,
    normalize_order_type,
    resolve_path,
)

PLACEHOLDER = SimpleNamespace(id=99, name="Online Order Item", price=Decimal("0.00"), sku=None, barcode=None)
FRIES = SimpleNamespace(id=2, name="Fries", price=Decimal("3.00"), sku="FRIES-1", barcode=None)


@pytest.fixture
def normalizer():
    return ExternalOrderNormalizer(matcher_factory=lambda: ItemMatcher([FRIES], PLACEHOLDER))


class TestPaths:
    def test_resolve_path(self):
        assert resolve_path({"order": {"store": {"id": 5}}}, "order.store.id") == 5
        assert resolve_path({"order": "flat"}, "order.store.id") is None

    def test_first_value_skips_empty(self):
        payload = {"order": {"id": ""}, "id": "top"}
        assert first_value(payload, ("order.id", "id")) == "top"


class TestNormalize:
    def test_nested_order_payload(self, normalizer):
        payload = {
            "order": {
                "id": "dd-100",
                "display_id": "A1B2",
                "status": "confirmed",
                "fulfillment_type": "pickup",
                "store": {"merchant_supplied_id": "store-1"},
                "consumer": {"name": "Pat"},
                "special_instructions": "Ring twice",
                "delivery_fee": "2.99",
                "items": [{"merchant_supplied_id": "FRIES-1", "quantity": 2, "price": "3.50"}],
            }
        }

        draft = normalizer.normalize(payload)

        assert draft.external_id == "dd-100"
        assert draft.synthetic_id is False
        assert draft.display_id == "A1B2"
        assert draft.status == "CONFIRMED"
        assert draft.order_type == "TAKEOUT"
        assert draft.store_reference == "store-1"
        assert draft.customer_name == "Pat"
        assert draft.notes == "Ring twice"
        assert draft.delivery_charge == Decimal("2.99")
        assert len(draft.items) == 1
        assert draft.items[0].menu_item_id == 2
        assert draft.items[0].quantity == 2
        assert draft.items[0].unit_price == Decimal("3.50")

    def test_top_level_aliases(self, normalizer):
        payload = {
            "external_order_id": "dd-200",
            "order_reference_id": "REF",
            "merchant_supplied_id": "store-2",
            "customer": {"name": "Lee"},
            "items": [{"name": "fries"}],
        }

        draft = normalizer.normalize(payload)

        assert draft.external_id == "dd-200"
        assert draft.display_id == "REF"
        assert draft.store_reference == "store-2"
        assert draft.customer_name == "Lee"
        assert draft.items[0].matched_by == "name"

    def test_nested_id_wins_over_top_level(self, normalizer):
        draft = normalizer.normalize({"id": "event-1", "order": {"id": "dd-300"}})
        assert draft.external_id == "dd-300"

    def test_numeric_id_becomes_text(self, normalizer):
        assert normalizer.normalize({"order_id": 12345}).external_id == "12345"

    def test_missing_id_gets_synthetic_id(self, normalizer):
        first = normalizer.normalize({"order": {"items": []}})
        second = normalizer.normalize({"order": {"items": []}})

        assert first.synthetic_id is True
        assert first.external_id.startswith("synthetic-")
        assert first.external_id != second.external_id

    def test_defaults(self, normalizer):
        draft = normalizer.normalize({"id": "dd-1"})

        assert draft.status == "NEW"
        assert draft.order_type == "DELIVERY"
        assert draft.store_reference is None
        assert draft.items == []
        assert draft.delivery_charge == Decimal("0.00")

    def test_non_object_payload(self, normalizer):
        draft = normalizer.normalize(["not", "an", "order"])
        assert draft.synthetic_id is True

    def test_matcher_is_not_built_without_lines(self):
        def explode():
            raise AssertionError("matcher should not be built")

        draft = ExternalOrderNormalizer(matcher_factory=explode).normalize({"id": "dd-1"})
        assert draft.items == []


class TestOrderType:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, "DELIVERY"),
            ("delivery", "DELIVERY"),
            ("PICKUP", "TAKEOUT"),
            ("takeout", "TAKEOUT"),
            ("to_go", "TAKEOUT"),
            ("dine_in", "DINE_IN"),
            ("something-else", "DELIVERY"),
        ],
    )
    def test_mapping(self, value, expected):
        assert normalize_order_type(value) == expected
