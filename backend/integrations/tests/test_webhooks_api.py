"""
Marketplace Webhook API Tests

End-to-end tests through the HTTP endpoints: order ingestion, release,
cancellation and courier updates, all against the real database.
"""
import pytest
from decimal import Decimal
from unittest import mock

from integrations.models import IntegrationOrder, IntegrationStore
from integrations.services.registry import IntegrationOrderRegistry
from kds.models import KitchenTicket
from orders.models import Order
from payments.services import PaymentService

WEBHOOKS = "/api/integrations/doordash/webhooks"


def order_payload(external_id="dd-1", store="store-1", items=None):
    return {
        "order": {
            "id": external_id,
            "display_id": "ABC123",
            "store": {"merchant_supplied_id": store},
            "consumer": {"name": "Jordan"},
            "items": items if items is not None else [{"merchant_supplied_id": "BRG-001", "quantity": 1}],
        }
    }


@pytest.mark.django_db
class TestOrderWebhook:
    """Test order ingestion"""

    def test_order_creates_pos_order(self, api_client, doordash_store, burger):
        response = api_client.post(f"{WEBHOOKS}/orders/", order_payload(), format="json")

        assert response.status_code == 200
        assert response.json() == {"ok": True}

        integration_order = IntegrationOrder.objects.get(external_id="dd-1")
        assert integration_order.store == doordash_store
        assert integration_order.display_id == "ABC123"
        pos_order = integration_order.pos_order
        assert pos_order.customer_name == "Jordan"
        assert pos_order.items.get().menu_item == burger
        assert pos_order.total_amount == Decimal("108.00")

    def test_replayed_order_creates_one_pos_order(self, api_client, doordash_store, burger):
        for _ in range(3):
            api_client.post(f"{WEBHOOKS}/orders/", order_payload(), format="json")

        assert IntegrationOrder.objects.count() == 1
        assert Order.objects.count() == 1

    def test_empty_payload_gets_placeholder_line(self, api_client, doordash_provider):
        response = api_client.post(f"{WEBHOOKS}/orders/", {}, format="json")

        assert response.status_code == 200
        integration_order = IntegrationOrder.objects.get()
        assert integration_order.synthetic_id is True
        assert integration_order.external_id.startswith("synthetic-")
        pos_order = integration_order.pos_order
        item = pos_order.items.get()
        assert item.price == Decimal("0.00")
        assert item.quantity == 1
        assert pos_order.total_amount == Decimal("0.00")

    def test_unmapped_store_is_acknowledged_and_dropped(self, api_client, doordash_store):
        response = api_client.post(
            f"{WEBHOOKS}/orders/", order_payload(store="elsewhere"), format="json"
        )

        assert response.status_code == 200
        assert IntegrationOrder.objects.count() == 0
        assert Order.objects.count() == 0

    def test_malformed_body_is_acknowledged(self, api_client, doordash_provider):
        response = api_client.post(
            f"{WEBHOOKS}/order-release/", "{not json", content_type="application/json"
        )
        assert response.status_code == 200

    def test_failed_upsert_returns_500(self, api_client, doordash_store):
        with mock.patch.object(
            IntegrationOrderRegistry, "upsert", side_effect=RuntimeError("boom")
        ):
            response = api_client.post(f"{WEBHOOKS}/orders/", order_payload(), format="json")

        assert response.status_code == 500
        assert response.json()["ok"] is False

    def test_oversized_delivery_fee_is_ignored(self, api_client, doordash_store, burger):
        payload = order_payload()
        payload["order"]["delivery_fee"] = "1e30"

        response = api_client.post(f"{WEBHOOKS}/orders/", payload, format="json")

        assert response.status_code == 200
        pos_order = IntegrationOrder.objects.get(external_id="dd-1").pos_order
        assert pos_order.delivery_charge == Decimal("0.00")
        assert pos_order.total_amount == Decimal("108.00")

    def test_oversized_item_price_falls_back_to_catalog(self, api_client, doordash_store, burger):
        payload = order_payload(items=[{"merchant_supplied_id": "BRG-001", "price": 1e40}])

        response = api_client.post(f"{WEBHOOKS}/orders/", payload, format="json")

        assert response.status_code == 200
        item = IntegrationOrder.objects.get(external_id="dd-1").pos_order.items.get()
        assert item.price == Decimal("100.00")

    def test_oversized_quantity_becomes_one(self, api_client, doordash_store, burger):
        payload = order_payload(items=[{"merchant_supplied_id": "BRG-001", "quantity": "1e25"}])

        response = api_client.post(f"{WEBHOOKS}/orders/", payload, format="json")

        assert response.status_code == 200
        item = IntegrationOrder.objects.get(external_id="dd-1").pos_order.items.get()
        assert item.quantity == 1

    def test_webhooks_need_no_authentication(self, api_client, doordash_provider):
        response = api_client.post(f"{WEBHOOKS}/dasher-status/", {"order_id": "x"}, format="json")
        assert response.status_code == 200


@pytest.mark.django_db
class TestLifecycleWebhooks:
    """Test release, cancel and courier events"""

    @pytest.fixture
    def ingested(self, api_client, doordash_store, burger):
        api_client.post(f"{WEBHOOKS}/orders/", order_payload(), format="json")
        return IntegrationOrder.objects.get(external_id="dd-1")

    def test_two_releases_make_one_ticket(self, api_client, ingested):
        for _ in range(2):
            response = api_client.post(
                f"{WEBHOOKS}/order-release/", {"order_id": "dd-1"}, format="json"
            )
            assert response.status_code == 200

        assert KitchenTicket.objects.filter(order=ingested.pos_order).count() == 1
        ingested.refresh_from_db()
        assert ingested.status == "RELEASED"
        assert ingested.pos_order.status == Order.OrderStatus.SENT

    def test_release_of_unknown_order_is_dropped(self, api_client, ingested):
        api_client.post(f"{WEBHOOKS}/order-release/", {"order_id": "other"}, format="json")
        assert KitchenTicket.objects.count() == 0

    def test_cancel_after_paid_voids_order(self, api_client, ingested):
        PaymentService.record_payment(ingested.pos_order, Decimal("108.00"))
        ingested.pos_order.refresh_from_db()
        assert ingested.pos_order.status == Order.OrderStatus.PAID

        response = api_client.post(
            f"{WEBHOOKS}/order-canceled/", {"external_order_id": "dd-1"}, format="json"
        )

        assert response.status_code == 200
        ingested.refresh_from_db()
        ingested.pos_order.refresh_from_db()
        assert ingested.status == "CANCELLED"
        assert ingested.pos_order.status == Order.OrderStatus.VOID

    def test_replayed_order_after_cancel_keeps_void(self, api_client, ingested):
        api_client.post(f"{WEBHOOKS}/order-canceled/", {"order_id": "dd-1"}, format="json")
        api_client.post(f"{WEBHOOKS}/orders/", order_payload(), format="json")

        ingested.pos_order.refresh_from_db()
        assert ingested.pos_order.status == Order.OrderStatus.VOID
        assert Order.objects.count() == 1

    def test_dasher_status_updates_payload_only(self, api_client, ingested):
        payload = {"order_id": "dd-1", "dasher_status": "ARRIVED"}

        api_client.post(f"{WEBHOOKS}/dasher-status/", payload, format="json")

        ingested.refresh_from_db()
        assert ingested.payload == payload
        assert ingested.status == "NEW"


@pytest.mark.django_db
class TestMenuStatusWebhook:
    def test_menu_status_is_stored_on_store(self, api_client, doordash_store):
        response = api_client.post(
            f"{WEBHOOKS}/menu-status/",
            {"merchant_supplied_id": "store-1", "menu_id": "m-77", "status": "SUCCESS"},
            format="json",
        )

        assert response.status_code == 200
        store = IntegrationStore.objects.get(pk=doordash_store.pk)
        assert store.get_settings().menu_id == "m-77"
        assert store.get_settings().last_menu_status == "SUCCESS"
