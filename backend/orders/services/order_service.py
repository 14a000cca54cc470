from decimal import Decimal
from typing import Iterable, Optional
import logging

from django.db import transaction

from discounts.models import Discount
from menu.models import MenuItem, Modifier
from menu.services import CatalogService
from orders.drafts import OrderDraft
from orders.models import Order, OrderDiscount, OrderItem, OrderItemModifier
from payments.money import quantize
from .calculation_service import OrderCalculationService

logger = logging.getLogger(__name__)

EMPTY_ORDER_LINE_NAME = "Online order"


class OrderService:
    """Core service for order lifecycle management and every ledger mutation."""

    @staticmethod
    def _lock(order: Order) -> Order:
        """Re-read an order under a row lock and refuse to touch VOID orders."""
        locked = Order.objects.select_for_update().get(pk=order.pk)
        if locked.status == Order.OrderStatus.VOID:
            raise ValueError(f"Order {order.pk} is void and can no longer be modified.")
        return locked

    @staticmethod
    def _finish(order: Order) -> Order:
        OrderCalculationService.recalculate_order_totals(order.pk)
        order.refresh_from_db()
        return order

    @staticmethod
    @transaction.atomic
    def create_order(
        order_type: str = Order.OrderType.DINE_IN,
        customer_name: str = "",
        notes: str = "",
    ) -> Order:
        """Creates a new, empty order."""
        if order_type not in Order.OrderType.values:
            raise ValueError(f"'{order_type}' is not a valid order type.")
        return Order.objects.create(
            order_type=order_type, customer_name=customer_name, notes=notes
        )

    @staticmethod
    @transaction.atomic
    def create_from_draft(draft: OrderDraft) -> Order:
        """
        Creates a POS order from a normalized draft, all or nothing.

        A draft without lines still gets exactly one zero-priced placeholder
        line so that no order is ever itemless.

        Args:
            draft: Normalized order with resolved lines.

        Returns:
            The new order with its totals already recomputed.
        """
        order = Order.objects.create(
            order_type=draft.order_type,
            status=Order.OrderStatus.OPEN,
            customer_name=draft.customer_name or "",
            notes=draft.notes or "",
            delivery_charge=draft.delivery_charge or Decimal("0.00"),
            service_charge=draft.service_charge or Decimal("0.00"),
        )

        if draft.items:
            for line in draft.items:
                item = OrderItem.objects.create(
                    order=order,
                    menu_item_id=line.menu_item_id,
                    name=line.name,
                    price=quantize(order.currency, line.unit_price),
                    quantity=line.quantity,
                    notes=line.notes or "",
                )
                OrderItemModifier.objects.bulk_create(
                    [
                        OrderItemModifier(
                            order_item=item,
                            name=modifier.name,
                            price=quantize(order.currency, modifier.price),
                            quantity=modifier.quantity,
                        )
                        for modifier in line.modifiers
                    ]
                )
        else:
            placeholder = CatalogService.ensure_placeholder_item()
            OrderItem.objects.create(
                order=order,
                menu_item=placeholder,
                name=EMPTY_ORDER_LINE_NAME,
                price=Decimal("0.00"),
                quantity=1,
            )

        logger.info(
            f"Created order {order.id} from external order {draft.external_id} "
            f"with {max(len(draft.items), 1)} lines"
        )
        return OrderService._finish(order)

    @staticmethod
    @transaction.atomic
    def add_item(
        order: Order,
        menu_item: MenuItem,
        quantity: int = 1,
        price: Optional[Decimal] = None,
        notes: str = "",
        modifiers: Iterable[Modifier] = (),
    ) -> OrderItem:
        """
        Adds a catalog item to an order. The unit price is snapshotted from
        the catalog unless an explicit price is given.
        """
        order = OrderService._lock(order)
        if quantity <= 0:
            raise ValueError("Quantity must be positive.")

        unit_price = menu_item.price if price is None else price
        item = OrderItem.objects.create(
            order=order,
            menu_item=menu_item,
            name=menu_item.name,
            price=quantize(order.currency, unit_price),
            quantity=quantity,
            notes=notes,
        )
        for modifier in modifiers:
            OrderItemModifier.objects.create(
                order_item=item,
                modifier=modifier,
                name=modifier.name,
                price=modifier.price,
                quantity=1,
            )

        OrderService._finish(order)
        return item

    @staticmethod
    @transaction.atomic
    def remove_item(order_item: OrderItem) -> Order:
        order = OrderService._lock(order_item.order)
        order_item.delete()
        return OrderService._finish(order)

    @staticmethod
    @transaction.atomic
    def apply_discount(
        order: Order,
        discount: Optional[Discount] = None,
        amount: Optional[Decimal] = None,
    ) -> OrderDiscount:
        """
        Applies a discount definition, an explicit override amount, or both.
        When both are given the override amount is what the ledger uses.
        """
        if discount is None and amount is None:
            raise ValueError("Either a discount or an override amount is required.")
        if amount is not None and amount < 0:
            raise ValueError("Discount amount cannot be negative.")
        if discount is not None and not discount.active:
            raise ValueError(f"Discount '{discount.name}' is not active.")

        order = OrderService._lock(order)
        applied = OrderDiscount.objects.create(order=order, discount=discount, amount=amount)
        OrderService._finish(order)
        return applied

    @staticmethod
    @transaction.atomic
    def remove_discount(applied: OrderDiscount) -> Order:
        order = OrderService._lock(applied.order)
        applied.delete()
        return OrderService._finish(order)

    @staticmethod
    @transaction.atomic
    def update_charges(
        order: Order,
        service_charge: Optional[Decimal] = None,
        delivery_charge: Optional[Decimal] = None,
        tax_exempt: Optional[bool] = None,
    ) -> Order:
        """Updates any of the order-level charge inputs; None leaves a field as is."""
        order = OrderService._lock(order)
        update_fields = ["updated_at"]
        if service_charge is not None:
            if service_charge < 0:
                raise ValueError("Service charge cannot be negative.")
            order.service_charge = quantize(order.currency, service_charge)
            update_fields.append("service_charge")
        if delivery_charge is not None:
            if delivery_charge < 0:
                raise ValueError("Delivery charge cannot be negative.")
            order.delivery_charge = quantize(order.currency, delivery_charge)
            update_fields.append("delivery_charge")
        if tax_exempt is not None:
            order.tax_exempt = tax_exempt
            update_fields.append("tax_exempt")
        order.save(update_fields=update_fields)
        return OrderService._finish(order)

    @staticmethod
    def set_tax_exempt(order: Order, exempt: bool = True) -> Order:
        return OrderService.update_charges(order, tax_exempt=exempt)

    @staticmethod
    @transaction.atomic
    def void_order(order: Order) -> Order:
        """
        Moves an order to VOID regardless of its current status. VOID is
        terminal, including for orders that were already PAID.
        """
        order = Order.objects.select_for_update().get(pk=order.pk)
        if order.status != Order.OrderStatus.VOID:
            previous = order.status
            order.status = Order.OrderStatus.VOID
            order.save(update_fields=["status", "updated_at"])
            logger.info(f"Voided order {order.id} (was {previous})")
        return OrderService._finish(order)
