from django.db import models

from orders.models import Order, OrderItem


class KitchenTicketStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    IN_PROGRESS = 'in_progress', 'In Progress'
    READY = 'ready', 'Ready'
    COMPLETED = 'completed', 'Completed'


class KitchenTicket(models.Model):
    """The single kitchen ticket for an order. At most one per order."""
    order = models.OneToOneField(Order, on_delete=models.CASCADE, related_name='kitchen_ticket')
    status = models.CharField(
        max_length=20, choices=KitchenTicketStatus.choices, default=KitchenTicketStatus.PENDING
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='kitchenticket_status_idx'),
        ]

    def __str__(self):
        return f"Ticket for {self.order_id}"


class KitchenTicketItem(models.Model):
    """Snapshot of one order line as the kitchen sees it."""
    ticket = models.ForeignKey(KitchenTicket, on_delete=models.CASCADE, related_name='items')
    order_item = models.ForeignKey(
        OrderItem, on_delete=models.SET_NULL, null=True, blank=True, related_name='kitchen_items'
    )
    name = models.CharField(max_length=200)
    quantity = models.PositiveIntegerField(default=1)
    modifiers_text = models.TextField(blank=True)
    notes = models.TextField(blank=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.quantity} x {self.name}"
