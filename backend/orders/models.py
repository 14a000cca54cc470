import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from discounts.models import Discount
from menu.models import MenuItem, Modifier


class Order(models.Model):
    # --- Status Fields ---
    class OrderStatus(models.TextChoices):
        OPEN = "OPEN", _("Open")  # Actively being built
        SENT = "SENT", _("Sent")  # Sent to the kitchen
        HOLD = "HOLD", _("Hold")  # Saved for later completion
        PAID = "PAID", _("Paid")  # Settled in full
        VOID = "VOID", _("Void")  # Terminal, never changed by recalculation

    class OrderType(models.TextChoices):
        DINE_IN = "DINE_IN", _("Dine In")
        TAKEOUT = "TAKEOUT", _("Takeout")
        DELIVERY = "DELIVERY", _("Delivery")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    status = models.CharField(
        max_length=10, choices=OrderStatus.choices, default=OrderStatus.OPEN
    )
    order_type = models.CharField(
        max_length=10, choices=OrderType.choices, default=OrderType.DINE_IN
    )
    currency = models.CharField(max_length=3, default=settings.DEFAULT_CURRENCY)

    customer_name = models.CharField(max_length=200, blank=True)
    notes = models.TextField(blank=True)

    # --- Charge Inputs ---
    tax_exempt = models.BooleanField(default=False)
    service_charge = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    delivery_charge = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )

    # --- Derived Financial Fields (always recomputed from parts) ---
    subtotal_amount = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    discount_amount = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    tax_amount = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    total_amount = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    paid_amount = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    due_amount = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="order_status_idx"),
            models.Index(fields=["created_at"], name="order_created_idx"),
        ]

    def __str__(self):
        return f"Order {self.id} ({self.status})"

    @property
    def is_void(self):
        return self.status == self.OrderStatus.VOID


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    menu_item = models.ForeignKey(
        MenuItem, on_delete=models.PROTECT, related_name="order_items"
    )
    name = models.CharField(
        max_length=200, help_text=_("Line name as shown on the ticket and receipt.")
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text=_("Unit price snapshot taken when the line was added."),
    )
    quantity = models.PositiveIntegerField(default=1)
    notes = models.TextField(
        blank=True, help_text=_("Customer notes, e.g., 'no onions'")
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self):
        return f"{self.quantity} x {self.name}"


class OrderItemModifier(models.Model):
    order_item = models.ForeignKey(
        OrderItem, on_delete=models.CASCADE, related_name="modifiers"
    )
    modifier = models.ForeignKey(
        Modifier,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        help_text=_("Catalog modifier. Null for free-text modifiers from external orders."),
    )
    name = models.CharField(max_length=200)
    price = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    quantity = models.PositiveIntegerField(default=1)

    def __str__(self):
        return self.name


class OrderDiscount(models.Model):
    """
    A discount applied to an order: either a reference to a Discount
    definition, an explicit override amount, or both (the override wins).
    """

    order = models.ForeignKey(
        Order, on_delete=models.CASCADE, related_name="applied_discounts"
    )
    discount = models.ForeignKey(
        Discount, on_delete=models.PROTECT, null=True, blank=True
    )
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        help_text=_("Explicit override amount. Takes precedence over the discount definition."),
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=models.Q(discount__isnull=False) | models.Q(amount__isnull=False),
                name="orderdiscount_has_source",
            ),
        ]

    def __str__(self):
        return f"Discount on {self.order_id}"
