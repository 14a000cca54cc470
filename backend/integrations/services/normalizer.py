"""
Normalization of raw marketplace order payloads into ``OrderDraft`` objects.

Marketplace payloads place fields either at the top level or nested under
``order`` and use several names for the same thing. Each logical field is
described by an ordered tuple of dotted paths; the first path that resolves
to a non-empty value wins.
"""

import logging
import uuid
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from orders.drafts import OrderDraft
from orders.models import Order
from payments.money import parse_amount
from .matcher import ItemMatcher

logger = logging.getLogger(__name__)

FIELD_PATHS = {
    "external_id": (
        "order.external_order_id",
        "order.order_id",
        "order.id",
        "external_order_id",
        "order_id",
        "id",
    ),
    "display_id": (
        "order.display_id",
        "order.order_reference_id",
        "display_id",
        "order_reference_id",
    ),
    "status": ("order.status", "status"),
    "order_type": (
        "order.order_type",
        "order.orderType",
        "order.fulfillment_type",
        "order_type",
        "orderType",
    ),
    "store_reference": (
        "order.store.merchant_supplied_id",
        "order.store.merchantSuppliedId",
        "order.merchant_supplied_id",
        "store.merchant_supplied_id",
        "store.merchantSuppliedId",
        "merchant_supplied_id",
        "store_id",
    ),
    "customer_name": (
        "order.consumer.name",
        "order.customer.name",
        "order.customer_name",
        "consumer.name",
        "customer.name",
        "customer_name",
    ),
    "notes": (
        "order.instructions",
        "order.delivery_instructions",
        "order.special_instructions",
        "instructions",
        "delivery_instructions",
    ),
    "delivery_charge": ("order.delivery_fee", "order.deliveryFee", "delivery_fee"),
    "service_charge": ("order.service_fee", "order.serviceFee", "service_fee"),
    "items": ("order.items", "items"),
}

# Lifecycle events (release, cancel, courier status) reference an order that
# was already ingested; their ids live at the top level first.
EVENT_FIELD_PATHS = {
    "external_id": (
        "external_order_id",
        "order_id",
        "id",
        "order.external_order_id",
        "order.id",
    ),
    "store_reference": (
        "store.merchant_supplied_id",
        "merchant_supplied_id",
        "merchantSuppliedId",
        "store_id",
    ),
    "menu_id": ("menu.id", "menu_id", "menuId"),
    "menu_status": ("event.status", "status"),
    "menu_event": ("event.type", "event_type"),
}

DEFAULT_STATUS = "NEW"


def resolve_path(payload: Any, path: str) -> Any:
    current = payload
    for key in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def first_value(payload: Any, paths) -> Any:
    """Value at the first path that resolves to something other than None or ''."""
    for path in paths:
        value = resolve_path(payload, path)
        if value is not None and value != "":
            return value
    return None


def extract_text(payload: Any, paths) -> Optional[str]:
    value = first_value(payload, paths)
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def normalize_order_type(value: Optional[str]) -> str:
    if not value:
        return Order.OrderType.DELIVERY
    upper = str(value).upper()
    if "PICKUP" in upper or "TAKEOUT" in upper or "TO_GO" in upper:
        return Order.OrderType.TAKEOUT
    if "DINE" in upper:
        return Order.OrderType.DINE_IN
    return Order.OrderType.DELIVERY


def synthetic_external_id() -> str:
    return f"synthetic-{uuid.uuid4()}"


def _default_matcher() -> ItemMatcher:
    from menu.services import CatalogService

    return ItemMatcher(
        CatalogService.resolvable_items(), CatalogService.ensure_placeholder_item()
    )


class ExternalOrderNormalizer:
    """
    Turns a raw order payload into an ``OrderDraft``.

    Args:
        matcher_factory: Builds the ``ItemMatcher`` for one payload. It is
            only called when the payload carries lines.
    """

    def __init__(self, matcher_factory: Optional[Callable[[], ItemMatcher]] = None):
        self.matcher_factory = matcher_factory or _default_matcher

    def normalize(self, payload: Dict[str, Any]) -> OrderDraft:
        payload = payload if isinstance(payload, dict) else {}

        external_id = extract_text(payload, FIELD_PATHS["external_id"])
        synthetic = external_id is None
        if synthetic:
            external_id = synthetic_external_id()
            logger.warning(
                f"Order payload carried no external id, using synthetic id {external_id}"
            )

        entries = first_value(payload, FIELD_PATHS["items"])
        entries = entries if isinstance(entries, list) else []
        items = self.matcher_factory().resolve_all(entries) if entries else []

        return OrderDraft(
            external_id=external_id,
            synthetic_id=synthetic,
            display_id=extract_text(payload, FIELD_PATHS["display_id"]),
            status=(extract_text(payload, FIELD_PATHS["status"]) or DEFAULT_STATUS).upper(),
            order_type=normalize_order_type(extract_text(payload, FIELD_PATHS["order_type"])),
            store_reference=extract_text(payload, FIELD_PATHS["store_reference"]),
            customer_name=extract_text(payload, FIELD_PATHS["customer_name"]) or "",
            notes=extract_text(payload, FIELD_PATHS["notes"]) or "",
            delivery_charge=parse_amount(first_value(payload, FIELD_PATHS["delivery_charge"]))
            or Decimal("0.00"),
            service_charge=parse_amount(first_value(payload, FIELD_PATHS["service_charge"]))
            or Decimal("0.00"),
            items=items,
        )
