from django.db import models


class Discount(models.Model):
    class DiscountType(models.TextChoices):
        PERCENT = "PERCENT", "Percentage"
        FLAT = "FLAT", "Flat Amount"

    name = models.CharField(max_length=255)
    code = models.CharField(
        max_length=50, null=True, blank=True, help_text="Optional code for manual discounts"
    )
    type = models.CharField(
        max_length=20,
        choices=DiscountType.choices,
    )
    value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text="Percentage (e.g. 15 for 15%) or flat amount in the order currency.",
    )
    active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        if self.type == self.DiscountType.PERCENT:
            return f"{self.name} ({self.value}%)"
        return f"{self.name} ({self.value} off)"
