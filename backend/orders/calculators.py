"""
Order ledger calculator.

Derives an order's financial totals and lifecycle status from a snapshot of
its parts (lines, modifiers, applied discounts, payments and charges).

The calculator is a pure function over a ``LedgerInput``: it never touches the
database, so loading the snapshot and persisting the ``LedgerResult`` belong to
an ``OrderLedgerRepository`` (see ``orders.repositories``).

All arithmetic runs on integer minor units. Each per-line tax and each
percentage discount is rounded half up to a whole minor unit before it is
summed, so totals never drift.

Usage:
    from orders.calculators import OrderCalculator
    result = OrderCalculator(ledger_input).calculate_totals()
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from discounts.factories import DiscountStrategyFactory
from orders.models import Order
from payments.money import from_minor, multiply_minor, to_minor

VOIDED_PAYMENT_STATUSES = ("VOID",)


@dataclass(frozen=True)
class LedgerModifier:
    price: Decimal
    quantity: int = 1


@dataclass(frozen=True)
class LedgerLine:
    price: Decimal
    quantity: int
    modifiers: List[LedgerModifier] = field(default_factory=list)
    tax_rate: Optional[Decimal] = None
    tax_active: bool = False


@dataclass(frozen=True)
class LedgerDiscount:
    amount: Optional[Decimal] = None
    type: Optional[str] = None
    value: Optional[Decimal] = None


@dataclass(frozen=True)
class LedgerPayment:
    amount: Decimal
    status: str = "COMPLETED"
    voided: bool = False


@dataclass(frozen=True)
class LedgerInput:
    """Everything the ledger needs to know about one order."""

    order_id: object
    status: str
    currency: str = "USD"
    tax_exempt: bool = False
    service_charge: Decimal = Decimal("0.00")
    delivery_charge: Decimal = Decimal("0.00")
    lines: List[LedgerLine] = field(default_factory=list)
    discounts: List[LedgerDiscount] = field(default_factory=list)
    payments: List[LedgerPayment] = field(default_factory=list)


@dataclass(frozen=True)
class LedgerResult:
    order_id: object
    currency: str
    status: str
    subtotal_minor: int
    discount_minor: int
    tax_minor: int
    total_minor: int
    paid_minor: int
    due_minor: int

    @property
    def subtotal(self) -> Decimal:
        return from_minor(self.currency, self.subtotal_minor)

    @property
    def discount_total(self) -> Decimal:
        return from_minor(self.currency, self.discount_minor)

    @property
    def tax_total(self) -> Decimal:
        return from_minor(self.currency, self.tax_minor)

    @property
    def total(self) -> Decimal:
        return from_minor(self.currency, self.total_minor)

    @property
    def paid_total(self) -> Decimal:
        return from_minor(self.currency, self.paid_minor)

    @property
    def due(self) -> Decimal:
        return from_minor(self.currency, self.due_minor)

    def as_dict(self):
        return {
            "order_id": str(self.order_id),
            "status": self.status,
            "subtotal": self.subtotal,
            "discount_total": self.discount_total,
            "tax_total": self.tax_total,
            "total": self.total,
            "paid_total": self.paid_total,
            "due": self.due,
        }


class OrderCalculator:
    """
    Computes subtotal, tax, discounts, payments and the derived status for
    one ``LedgerInput``.
    """

    def __init__(self, ledger_input: LedgerInput):
        self.source = ledger_input
        self.currency = ledger_input.currency or "USD"

    def calculate_line(self, line: LedgerLine) -> int:
        """
        Line total in minor units: unit price times quantity plus every
        modifier's price times its quantity.
        """
        base = to_minor(self.currency, line.price) * line.quantity
        modifiers = sum(
            to_minor(self.currency, modifier.price) * modifier.quantity
            for modifier in line.modifiers
        )
        return base + modifiers

    def calculate_subtotal(self) -> int:
        return sum(self.calculate_line(line) for line in self.source.lines)

    def calculate_tax(self) -> int:
        """
        Sum of per-line taxes. A line is taxed only when its tax is active,
        its rate is positive and the order is not tax exempt.
        """
        if self.source.tax_exempt:
            return 0

        tax_minor = 0
        for line in self.source.lines:
            if not line.tax_active or line.tax_rate is None or line.tax_rate <= 0:
                continue
            tax_minor += multiply_minor(self.calculate_line(line), line.tax_rate)
        return tax_minor

    def calculate_discounts(self, subtotal_minor: int) -> int:
        """
        Sum of applied discounts. An explicit override amount always wins over
        the referenced definition, even when it is zero.
        """
        discount_minor = 0
        for applied in self.source.discounts:
            if applied.amount is not None:
                discount_minor += to_minor(self.currency, applied.amount)
                continue
            if applied.value is None:
                continue
            strategy = DiscountStrategyFactory.get_strategy(applied.type)
            discount_minor += strategy.apply(subtotal_minor, applied.value, self.currency)
        return discount_minor

    def calculate_paid(self) -> int:
        return sum(
            to_minor(self.currency, payment.amount)
            for payment in self.source.payments
            if not payment.voided and payment.status not in VOIDED_PAYMENT_STATUSES
        )

    def derive_status(self, total_minor: int, due_minor: int) -> str:
        current = self.source.status
        if current == Order.OrderStatus.VOID:
            return current
        if due_minor <= 0 and total_minor > 0:
            return Order.OrderStatus.PAID
        if current == Order.OrderStatus.PAID:
            return Order.OrderStatus.OPEN
        return current

    def calculate_totals(self) -> LedgerResult:
        subtotal_minor = self.calculate_subtotal()
        tax_minor = self.calculate_tax()
        discount_minor = self.calculate_discounts(subtotal_minor)
        paid_minor = self.calculate_paid()

        total_minor = (
            subtotal_minor
            - discount_minor
            + tax_minor
            + to_minor(self.currency, self.source.service_charge or 0)
            + to_minor(self.currency, self.source.delivery_charge or 0)
        )
        due_minor = total_minor - paid_minor

        return LedgerResult(
            order_id=self.source.order_id,
            currency=self.currency,
            status=str(self.derive_status(total_minor, due_minor)),
            subtotal_minor=subtotal_minor,
            discount_minor=discount_minor,
            tax_minor=tax_minor,
            total_minor=total_minor,
            paid_minor=paid_minor,
            due_minor=due_minor,
        )
