import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from django.db import IntegrityError, transaction

from orders.drafts import OrderDraft
from orders.models import Order
from orders.services import OrderService
from ..models import IntegrationOrder, IntegrationProvider, IntegrationStore

logger = logging.getLogger(__name__)


@dataclass
class UpsertResult:
    integration_order: IntegrationOrder
    created: bool


class IntegrationOrderRegistry:
    """
    Idempotent upsert of external orders keyed by (provider, external id).

    The first sighting of a key creates the integration order row and its POS
    order in one unit; every later sighting only refreshes the provider
    status, display id and payload. Replays, including concurrent ones, never
    create a second POS order.
    """

    def __init__(self, order_factory: Optional[Callable[[OrderDraft], Order]] = None):
        self.order_factory = order_factory or OrderService.create_from_draft

    @transaction.atomic
    def upsert(
        self,
        provider: IntegrationProvider,
        draft: OrderDraft,
        raw_payload: Dict[str, Any],
        store: Optional[IntegrationStore] = None,
    ) -> UpsertResult:
        existing = self._locked(provider, draft.external_id)

        if existing is None:
            try:
                with transaction.atomic():
                    integration_order = self._create(provider, draft, raw_payload, store)
                logger.info(
                    f"Registered {provider.code} order {draft.external_id} "
                    f"as POS order {integration_order.pos_order_id}"
                )
                return UpsertResult(integration_order, created=True)
            except IntegrityError:
                existing = self._locked(provider, draft.external_id)
                if existing is None:
                    raise
                logger.info(
                    f"Concurrent delivery of {provider.code} order {draft.external_id}, "
                    f"applying as update"
                )

        self._update(existing, draft, raw_payload, store)
        return UpsertResult(existing, created=False)

    @staticmethod
    def _locked(provider, external_id) -> Optional[IntegrationOrder]:
        return (
            IntegrationOrder.objects.select_for_update()
            .filter(provider=provider, external_id=external_id)
            .first()
        )

    def _create(self, provider, draft, raw_payload, store) -> IntegrationOrder:
        integration_order = IntegrationOrder.objects.create(
            provider=provider,
            store=store,
            external_id=draft.external_id,
            synthetic_id=draft.synthetic_id,
            display_id=draft.display_id,
            status=draft.status,
            order_type=draft.order_type,
            payload=raw_payload,
        )
        integration_order.pos_order = self.order_factory(draft)
        integration_order.save(update_fields=["pos_order", "updated_at"])
        return integration_order

    def _update(self, integration_order, draft, raw_payload, store) -> None:
        integration_order.status = draft.status
        integration_order.display_id = draft.display_id
        integration_order.payload = raw_payload
        update_fields = ["status", "display_id", "payload", "updated_at"]

        if integration_order.store_id is None and store is not None:
            integration_order.store = store
            update_fields.append("store")

        if integration_order.pos_order_id is None:
            integration_order.pos_order = self.order_factory(draft)
            update_fields.append("pos_order")
            logger.info(
                f"Bound legacy integration order {integration_order.pk} "
                f"to POS order {integration_order.pos_order_id}"
            )

        integration_order.save(update_fields=update_fields)
