from decimal import Decimal
import logging

from django.db import transaction

from orders.models import Order
from orders.services import OrderCalculationService
from .models import Payment
from .money import quantize

logger = logging.getLogger(__name__)


class PaymentService:
    """Records and voids tenders. Every change ends with a ledger recompute."""

    @staticmethod
    @transaction.atomic
    def record_payment(
        order: Order,
        amount: Decimal,
        method: str = Payment.PaymentMethod.CASH,
        reference: str = "",
        status: str = Payment.PaymentStatus.COMPLETED,
    ) -> Payment:
        """
        Records a payment against an order.

        Raises:
            ValueError: If the amount is not positive, the method or status is
                unknown, or the order is void.
        """
        order = Order.objects.select_for_update().get(pk=order.pk)
        if order.status == Order.OrderStatus.VOID:
            raise ValueError(f"Cannot take payment on void order {order.pk}.")
        if amount is None or amount <= 0:
            raise ValueError("Payment amount must be positive.")
        if method not in Payment.PaymentMethod.values:
            raise ValueError(f"'{method}' is not a valid payment method.")
        if status not in Payment.PaymentStatus.values:
            raise ValueError(f"'{status}' is not a valid payment status.")

        payment = Payment.objects.create(
            order=order,
            amount=quantize(order.currency, amount),
            method=method,
            reference=reference or "",
            status=status,
        )
        logger.info(f"Recorded {method} payment {payment.id} of {payment.amount} on order {order.pk}")

        OrderCalculationService.recalculate_order_totals(order.pk)
        return payment

    @staticmethod
    @transaction.atomic
    def void_payment(payment: Payment) -> Payment:
        """Voids a payment; a PAID order whose due rises above zero reverts to OPEN."""
        payment = Payment.objects.select_for_update().get(pk=payment.pk)
        if payment.voided and payment.status == Payment.PaymentStatus.VOID:
            return payment

        payment.voided = True
        payment.status = Payment.PaymentStatus.VOID
        payment.save(update_fields=["voided", "status", "updated_at"])
        logger.info(f"Voided payment {payment.id} on order {payment.order_id}")

        OrderCalculationService.recalculate_order_totals(payment.order_id)
        return payment
