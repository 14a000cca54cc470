import uuid
from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _

from orders.models import Order


class Payment(models.Model):
    """
    A single tender recorded against an order. Voided payments, or payments
    whose status is VOID, never count towards the order's paid total.
    """

    class PaymentStatus(models.TextChoices):
        PENDING = "PENDING", _("Pending")
        COMPLETED = "COMPLETED", _("Completed")
        VOID = "VOID", _("Void")

    class PaymentMethod(models.TextChoices):
        CASH = "CASH", _("Cash")
        CARD = "CARD", _("Card")
        MARKETPLACE = "MARKETPLACE", _("Marketplace")
        OTHER = "OTHER", _("Other")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="payments")
    amount = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.COMPLETED,
    )
    voided = models.BooleanField(default=False)
    method = models.CharField(
        max_length=20, choices=PaymentMethod.choices, default=PaymentMethod.CASH
    )
    reference = models.CharField(
        max_length=255,
        blank=True,
        help_text=_("External reference, e.g. a card processor transaction id."),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = _("Payment")
        verbose_name_plural = _("Payments")
        indexes = [
            models.Index(fields=["order", "status"], name="payment_order_status_idx"),
        ]

    def __str__(self):
        return f"{self.method} {self.amount} on {self.order_id}"

    @property
    def counts_towards_paid(self):
        return not self.voided and self.status != self.PaymentStatus.VOID
