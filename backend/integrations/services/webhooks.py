"""
Routing of inbound marketplace webhook events.

Every handler acknowledges. Events that cannot be tied to something we know
(no external id, unknown integration order, unmapped store) are logged and
dropped so the marketplace's delivery queue is never blocked by them. Only a
failed order upsert propagates, after its transaction has rolled back.
"""

import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.utils import timezone

from ..config import StoreSettings
from ..repositories import DjangoIntegrationRepository, IntegrationRepository
from .dispatch import KitchenDispatchTrigger
from .normalizer import EVENT_FIELD_PATHS, ExternalOrderNormalizer, extract_text
from .registry import IntegrationOrderRegistry

logger = logging.getLogger(__name__)

ACK = {"ok": True}


class WebhookEventType:
    ORDER = "order"
    MENU_STATUS = "menu-status"
    ORDER_RELEASE = "order-release"
    ORDER_CANCELED = "order-canceled"
    DASHER_STATUS = "dasher-status"

    ALL = (ORDER, MENU_STATUS, ORDER_RELEASE, ORDER_CANCELED, DASHER_STATUS)


class IntegrationOrderStatus:
    RELEASED = "RELEASED"
    CANCELLED = "CANCELLED"


class WebhookEventRouter:
    def __init__(
        self,
        repository: Optional[IntegrationRepository] = None,
        normalizer: Optional[ExternalOrderNormalizer] = None,
        registry: Optional[IntegrationOrderRegistry] = None,
        trigger: Optional[KitchenDispatchTrigger] = None,
        provider_code: Optional[str] = None,
    ):
        self.repository = repository or DjangoIntegrationRepository()
        self.normalizer = normalizer or ExternalOrderNormalizer()
        self.registry = registry or IntegrationOrderRegistry()
        self.trigger = trigger or KitchenDispatchTrigger()
        self.provider_code = provider_code or settings.DOORDASH_PROVIDER_CODE
        self._handlers = {
            WebhookEventType.ORDER: self.handle_order,
            WebhookEventType.MENU_STATUS: self.handle_menu_status,
            WebhookEventType.ORDER_RELEASE: self.handle_order_release,
            WebhookEventType.ORDER_CANCELED: self.handle_order_canceled,
            WebhookEventType.DASHER_STATUS: self.handle_dasher_status,
        }

    def handle(self, event_type: str, payload: Any) -> Dict[str, bool]:
        handler = self._handlers.get(event_type)
        if handler is None:
            logger.warning(f"Dropping webhook with unknown event type '{event_type}'")
            return ACK
        return handler(payload if isinstance(payload, dict) else {})

    def handle_order(self, payload: Dict[str, Any]) -> Dict[str, bool]:
        provider = self.repository.get_provider(self.provider_code)
        draft = self.normalizer.normalize(payload)

        store = None
        if draft.store_reference:
            store = self.repository.find_store(provider, draft.store_reference)
            if store is None:
                logger.warning(
                    f"Dropping {provider.code} order {draft.external_id}: "
                    f"store '{draft.store_reference}' is not mapped"
                )
                return ACK

        try:
            result = self.registry.upsert(provider, draft, payload, store)
        except Exception:
            logger.error(
                f"Upsert of {provider.code} order {draft.external_id} failed and was rolled back",
                exc_info=True,
            )
            raise

        logger.info(
            f"Accepted {provider.code} order event {draft.external_id} "
            f"status={draft.status} created={result.created}"
        )
        return ACK

    def handle_menu_status(self, payload: Dict[str, Any]) -> Dict[str, bool]:
        provider = self.repository.get_provider(self.provider_code)
        merchant_supplied_id = extract_text(payload, EVENT_FIELD_PATHS["store_reference"])
        if not merchant_supplied_id:
            logger.warning("Dropping menu status event without a store reference")
            return ACK

        store = self.repository.find_store(provider, merchant_supplied_id)
        if store is None:
            logger.warning(f"Dropping menu status event for unmapped store '{merchant_supplied_id}'")
            return ACK

        store_settings = StoreSettings.from_dict(store.settings)
        store_settings.menu_id = (
            extract_text(payload, EVENT_FIELD_PATHS["menu_id"]) or store_settings.menu_id
        )
        store_settings.last_menu_status = extract_text(payload, EVENT_FIELD_PATHS["menu_status"])
        store_settings.last_menu_event = extract_text(payload, EVENT_FIELD_PATHS["menu_event"])
        store_settings.last_menu_at = timezone.now().isoformat()
        self.repository.save_store_settings(store, store_settings)

        logger.info(
            f"Recorded menu status '{store_settings.last_menu_status}' "
            f"for store '{merchant_supplied_id}'"
        )
        return ACK

    def _lifecycle_target(self, payload, event_type):
        """Locked integration order a lifecycle event refers to, or None to drop it."""
        provider = self.repository.get_provider(self.provider_code)
        external_id = extract_text(payload, EVENT_FIELD_PATHS["external_id"])
        if not external_id:
            logger.warning(f"Dropping {event_type} event without an external order id")
            return None

        integration_order = self.repository.find_order(provider, external_id)
        if integration_order is None:
            logger.warning(f"Dropping {event_type} event for unknown order {external_id}")
        return integration_order

    def handle_order_release(self, payload: Dict[str, Any]) -> Dict[str, bool]:
        with self.repository.atomic():
            integration_order = self._lifecycle_target(payload, WebhookEventType.ORDER_RELEASE)
            if integration_order is None:
                return ACK

            if integration_order.pos_order_id:
                self.trigger.fire(integration_order.pos_order_id)
            self.repository.save_order(
                integration_order,
                {"status": IntegrationOrderStatus.RELEASED, "payload": payload},
            )

        logger.info(f"Released order {integration_order.external_id}")
        return ACK

    def handle_order_canceled(self, payload: Dict[str, Any]) -> Dict[str, bool]:
        with self.repository.atomic():
            integration_order = self._lifecycle_target(payload, WebhookEventType.ORDER_CANCELED)
            if integration_order is None:
                return ACK

            if integration_order.pos_order_id:
                self.repository.void_pos_order(integration_order.pos_order_id)
            self.repository.save_order(
                integration_order,
                {"status": IntegrationOrderStatus.CANCELLED, "payload": payload},
            )

        logger.info(f"Cancelled order {integration_order.external_id}")
        return ACK

    def handle_dasher_status(self, payload: Dict[str, Any]) -> Dict[str, bool]:
        with self.repository.atomic():
            integration_order = self._lifecycle_target(payload, WebhookEventType.DASHER_STATUS)
            if integration_order is None:
                return ACK
            self.repository.save_order(integration_order, {"payload": payload})

        logger.info(f"Recorded courier status for order {integration_order.external_id}")
        return ACK
