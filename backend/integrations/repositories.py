"""
Data access seams for the webhook router and the kitchen dispatch trigger.

Each collaborator gets its persistence through one of these interfaces so the
routing and exactly-once logic can be exercised against in-memory fakes. The
Django implementations are the defaults everywhere outside of tests.
"""

from abc import ABC, abstractmethod
from contextlib import nullcontext

from django.conf import settings
from django.db import transaction

from kds.models import KitchenTicket
from kds.services import KitchenDispatchService
from orders.models import Order
from orders.services import OrderService
from .config import StoreSettings
from .models import IntegrationOrder, IntegrationProvider, IntegrationStore

PROVIDER_NAMES = {
    "DOORDASH": "DoorDash",
}


class IntegrationRepository(ABC):
    def atomic(self):
        return nullcontext()

    @abstractmethod
    def get_provider(self, code: str):
        """Return the provider row for ``code``, creating a disabled one if needed."""

    @abstractmethod
    def find_store(self, provider, merchant_supplied_id: str):
        pass

    @abstractmethod
    def find_order(self, provider, external_id: str):
        """Integration order for (provider, external id) under a row lock, or None."""

    @abstractmethod
    def save_order(self, integration_order, fields) -> None:
        pass

    @abstractmethod
    def save_store_settings(self, store, store_settings: StoreSettings) -> None:
        pass

    @abstractmethod
    def void_pos_order(self, order_id) -> None:
        pass


class DjangoIntegrationRepository(IntegrationRepository):
    def atomic(self):
        return transaction.atomic()

    def get_provider(self, code: str = None):
        code = (code or settings.DOORDASH_PROVIDER_CODE).upper()
        provider, _ = IntegrationProvider.objects.get_or_create(
            code=code,
            defaults={"name": PROVIDER_NAMES.get(code, code.title()), "enabled": False, "settings": {}},
        )
        return provider

    def find_store(self, provider, merchant_supplied_id: str):
        if not merchant_supplied_id:
            return None
        return IntegrationStore.objects.filter(
            provider=provider, merchant_supplied_id=str(merchant_supplied_id)
        ).first()

    def find_order(self, provider, external_id: str):
        return (
            IntegrationOrder.objects.select_for_update()
            .filter(provider=provider, external_id=str(external_id))
            .first()
        )

    def save_order(self, integration_order, fields) -> None:
        for name, value in fields.items():
            setattr(integration_order, name, value)
        integration_order.save(update_fields=[*fields.keys(), "updated_at"])

    def save_store_settings(self, store, store_settings: StoreSettings) -> None:
        store.set_settings(store_settings)
        store.save(update_fields=["settings", "updated_at"])

    def void_pos_order(self, order_id) -> None:
        OrderService.void_order(Order(pk=order_id))


class KitchenGateway(ABC):
    def atomic(self):
        return nullcontext()

    @abstractmethod
    def lock_order(self, order_id) -> bool:
        """Lock the order row; False when the order does not exist."""

    @abstractmethod
    def has_ticket(self, order_id) -> bool:
        pass

    @abstractmethod
    def dispatch(self, order_id) -> None:
        pass


class DjangoKitchenGateway(KitchenGateway):
    def atomic(self):
        return transaction.atomic()

    def lock_order(self, order_id) -> bool:
        locked = Order.objects.select_for_update().filter(pk=order_id).values_list("pk", flat=True)
        return len(locked) > 0

    def has_ticket(self, order_id) -> bool:
        return KitchenTicket.objects.filter(order_id=order_id).exists()

    def dispatch(self, order_id) -> None:
        KitchenDispatchService.dispatch(order_id)
