"""
Persistence seam for the order ledger.

``OrderCalculationService`` reads a ``LedgerInput`` snapshot and writes a
``LedgerResult`` back through an ``OrderLedgerRepository``. The Django
implementation below holds a row lock on the order for the whole
read-compute-write cycle; tests substitute an in-memory implementation.
"""

from abc import ABC, abstractmethod
from contextlib import nullcontext
from typing import Optional

from django.db import transaction
from django.utils import timezone

from orders.calculators import (
    LedgerDiscount,
    LedgerInput,
    LedgerLine,
    LedgerModifier,
    LedgerPayment,
    LedgerResult,
)
from orders.models import Order


class OrderLedgerRepository(ABC):
    def atomic(self):
        """Context in which one load/save pair runs. No-op by default."""
        return nullcontext()

    @abstractmethod
    def load(self, order_id) -> Optional[LedgerInput]:
        """Snapshot an order's parts, or None when the order does not exist."""

    @abstractmethod
    def save(self, result: LedgerResult) -> None:
        """Persist every derived field and the derived status."""


class DjangoOrderLedgerRepository(OrderLedgerRepository):
    def atomic(self):
        return transaction.atomic()

    def load(self, order_id) -> Optional[LedgerInput]:
        try:
            order = Order.objects.select_for_update().get(pk=order_id)
        except (Order.DoesNotExist, ValueError):
            return None

        items = order.items.select_related("menu_item__tax").prefetch_related("modifiers")
        lines = []
        for item in items:
            tax = item.menu_item.tax
            lines.append(
                LedgerLine(
                    price=item.price,
                    quantity=item.quantity,
                    modifiers=[
                        LedgerModifier(price=modifier.price, quantity=modifier.quantity)
                        for modifier in item.modifiers.all()
                    ],
                    tax_rate=tax.rate if tax else None,
                    tax_active=bool(tax and tax.active),
                )
            )

        discounts = [
            LedgerDiscount(
                amount=applied.amount,
                type=applied.discount.type if applied.discount else None,
                value=applied.discount.value if applied.discount else None,
            )
            for applied in order.applied_discounts.select_related("discount")
        ]

        payments = [
            LedgerPayment(amount=payment.amount, status=payment.status, voided=payment.voided)
            for payment in order.payments.all()
        ]

        return LedgerInput(
            order_id=order.id,
            status=order.status,
            currency=order.currency,
            tax_exempt=order.tax_exempt,
            service_charge=order.service_charge,
            delivery_charge=order.delivery_charge,
            lines=lines,
            discounts=discounts,
            payments=payments,
        )

    def save(self, result: LedgerResult) -> None:
        Order.objects.filter(pk=result.order_id).update(
            subtotal_amount=result.subtotal,
            discount_amount=result.discount_total,
            tax_amount=result.tax_total,
            total_amount=result.total,
            paid_amount=result.paid_total,
            due_amount=result.due,
            status=result.status,
            updated_at=timezone.now(),
        )
