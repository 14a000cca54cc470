"""
Order API Tests

These tests verify the staff-only POS ledger endpoints: every write goes
through a service call and the response carries the recomputed totals.
"""
import pytest
from decimal import Decimal

from orders.models import Order
from orders.services import OrderService
from payments.models import Payment


@pytest.mark.django_db
class TestOrderAPIPermissions:
    """Test that the ledger surface is staff only"""

    def test_anonymous_rejected(self, api_client, order):
        response = api_client.get("/api/orders/")
        assert response.status_code == 403

    def test_non_staff_rejected(self, api_client, regular_user, order):
        api_client.force_authenticate(user=regular_user)
        response = api_client.get(f"/api/orders/{order.id}/")
        assert response.status_code == 403


@pytest.mark.django_db
class TestOrderAPI:
    """Test the order ledger endpoints"""

    def test_create_and_retrieve(self, staff_client):
        response = staff_client.post(
            "/api/orders/", {"order_type": "TAKEOUT", "customer_name": "Ana"}, format="json"
        )
        assert response.status_code == 201
        assert response.data["order_type"] == "TAKEOUT"
        assert response.data["total_amount"] == "0.00"

        detail = staff_client.get(f"/api/orders/{response.data['id']}/")
        assert detail.status_code == 200
        assert detail.data["customer_name"] == "Ana"

    def test_add_item(self, staff_client, order, burger):
        response = staff_client.post(
            f"/api/orders/{order.id}/items/", {"menu_item": burger.id, "quantity": 1}, format="json"
        )

        assert response.status_code == 201
        assert response.data["subtotal_amount"] == "100.00"
        assert response.data["tax_amount"] == "8.00"
        assert response.data["total_amount"] == "108.00"
        assert len(response.data["items"]) == 1

    def test_add_item_validation(self, staff_client, order, burger):
        response = staff_client.post(
            f"/api/orders/{order.id}/items/", {"menu_item": burger.id, "quantity": 0}, format="json"
        )
        assert response.status_code == 400

    def test_remove_item(self, staff_client, order, burger):
        item = OrderService.add_item(order, burger)

        response = staff_client.delete(f"/api/orders/{order.id}/items/{item.id}/")

        assert response.status_code == 200
        assert response.data["total_amount"] == "0.00"

    def test_apply_override_discount(self, staff_client, order, burger):
        OrderService.add_item(order, burger)

        response = staff_client.post(
            f"/api/orders/{order.id}/discounts/", {"amount": "4.00"}, format="json"
        )

        assert response.status_code == 201
        assert response.data["discount_amount"] == "4.00"
        assert response.data["total_amount"] == "104.00"

    def test_apply_discount_requires_source(self, staff_client, order):
        response = staff_client.post(f"/api/orders/{order.id}/discounts/", {}, format="json")
        assert response.status_code == 400

    def test_inactive_discount_rejected(self, staff_client, order, ten_percent_off):
        ten_percent_off.active = False
        ten_percent_off.save()

        response = staff_client.post(
            f"/api/orders/{order.id}/discounts/", {"discount": ten_percent_off.id}, format="json"
        )
        assert response.status_code == 400

    def test_update_charges(self, staff_client, order, burger):
        OrderService.add_item(order, burger)

        response = staff_client.patch(
            f"/api/orders/{order.id}/charges/",
            {"service_charge": "2.00", "tax_exempt": True},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["tax_amount"] == "0.00"
        assert response.data["total_amount"] == "102.00"

    def test_recalculate_repairs_stale_totals(self, staff_client, order, burger):
        OrderService.add_item(order, burger)
        Order.objects.filter(pk=order.pk).update(total_amount=Decimal("1.00"))

        response = staff_client.post(f"/api/orders/{order.id}/recalculate/")

        assert response.status_code == 200
        assert response.data["total_amount"] == "108.00"

    def test_record_payment_marks_paid(self, staff_client, order, burger):
        OrderService.add_item(order, burger)

        response = staff_client.post(
            f"/api/orders/{order.id}/payments/",
            {"amount": "108.00", "method": "CARD"},
            format="json",
        )

        assert response.status_code == 201
        assert response.data["status"] == "PAID"
        assert response.data["due_amount"] == "0.00"
        assert response.data["payment"]["method"] == "CARD"

    def test_record_payment_rejects_non_positive(self, staff_client, order):
        response = staff_client.post(
            f"/api/orders/{order.id}/payments/", {"amount": "0.00"}, format="json"
        )
        assert response.status_code == 400

    def test_void_payment_reopens_order(self, staff_client, order, burger):
        from payments.services import PaymentService

        OrderService.add_item(order, burger)
        payment = PaymentService.record_payment(order, Decimal("108.00"))

        response = staff_client.post(f"/api/payments/{payment.id}/void/")

        assert response.status_code == 200
        assert response.data["voided"] is True
        assert response.data["status"] == Payment.PaymentStatus.VOID
        order.refresh_from_db()
        assert order.status == Order.OrderStatus.OPEN

    def test_void_order(self, staff_client, order, burger):
        OrderService.add_item(order, burger)

        response = staff_client.post(f"/api/orders/{order.id}/void/")
        assert response.status_code == 200
        assert response.data["status"] == "VOID"

        response = staff_client.post(
            f"/api/orders/{order.id}/items/", {"menu_item": burger.id}, format="json"
        )
        assert response.status_code == 400

    def test_orders_cannot_be_deleted(self, staff_client, order):
        response = staff_client.delete(f"/api/orders/{order.id}/")
        assert response.status_code == 405
