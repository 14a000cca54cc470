from typing import Optional
import logging

from django.db import transaction

from orders.models import Order
from ..models import KitchenTicket, KitchenTicketItem, KitchenTicketStatus

logger = logging.getLogger(__name__)


class KitchenDispatchService:
    """Sends orders to the kitchen by creating their single kitchen ticket."""

    @classmethod
    @transaction.atomic
    def dispatch(cls, order_id) -> Optional[KitchenTicket]:
        """
        Create the kitchen ticket for an order and move an OPEN order to SENT.

        Callers are expected to check for an existing ticket first; the
        one-to-one constraint on ``KitchenTicket.order`` rejects a second one.

        Returns:
            The new ticket, or None if the order does not exist.
        """
        order = Order.objects.select_for_update().filter(pk=order_id).first()
        if order is None:
            logger.warning(f"Kitchen dispatch skipped, order {order_id} not found")
            return None

        ticket = KitchenTicket.objects.create(order=order, status=KitchenTicketStatus.PENDING)

        items = order.items.prefetch_related('modifiers')
        KitchenTicketItem.objects.bulk_create([
            KitchenTicketItem(
                ticket=ticket,
                order_item=item,
                name=item.name,
                quantity=item.quantity,
                modifiers_text=', '.join(modifier.name for modifier in item.modifiers.all()),
                notes=item.notes,
            )
            for item in items
        ])

        if order.status == Order.OrderStatus.OPEN:
            order.status = Order.OrderStatus.SENT
            order.save(update_fields=['status', 'updated_at'])

        logger.info(f"Created kitchen ticket {ticket.id} for order {order.id}")
        return ticket
