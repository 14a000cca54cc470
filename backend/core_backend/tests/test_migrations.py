"""
Schema Tests

The committed migrations must describe the current models, and the database
they build must enforce the constraints the ledger and the order registry
rely on.
"""
import pytest
from io import StringIO

from django.core.management import call_command
from django.db import IntegrityError, transaction

from integrations.models import IntegrationOrder
from kds.models import KitchenTicket
from orders.models import Order, OrderDiscount


@pytest.mark.django_db
class TestMigrations:
    def test_no_model_changes_without_migrations(self):
        # Exits with SystemExit(1) when a model has drifted from its migrations
        call_command("makemigrations", "--check", "--dry-run", stdout=StringIO())


@pytest.mark.django_db
class TestDatabaseConstraints:
    def test_external_order_is_unique_per_provider(self, doordash_provider):
        IntegrationOrder.objects.create(
            provider=doordash_provider, external_id="dd-1", order_type=Order.OrderType.DELIVERY
        )

        with pytest.raises(IntegrityError), transaction.atomic():
            IntegrationOrder.objects.create(
                provider=doordash_provider, external_id="dd-1", order_type=Order.OrderType.DELIVERY
            )

    def test_applied_discount_needs_a_source(self, order):
        with pytest.raises(IntegrityError), transaction.atomic():
            OrderDiscount.objects.create(order=order)

    def test_one_kitchen_ticket_per_order(self, order):
        KitchenTicket.objects.create(order=order)

        with pytest.raises(IntegrityError), transaction.atomic():
            KitchenTicket.objects.create(order=order)
