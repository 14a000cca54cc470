from django.db import models
from django.utils.translation import gettext_lazy as _

from orders.models import Order
from .config import ProviderSettings, StoreSettings


class IntegrationProvider(models.Model):
    code = models.CharField(
        max_length=50, unique=True, help_text=_("Upper-case provider code, e.g. 'DOORDASH'.")
    )
    name = models.CharField(max_length=100)
    enabled = models.BooleanField(default=False)
    settings = models.JSONField(
        default=dict,
        blank=True,
        help_text=_("Credentials, signing key material, business hours and menu naming."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code"]

    def __str__(self):
        return f"{self.name} ({self.code})"

    def get_settings(self) -> ProviderSettings:
        return ProviderSettings.from_dict(self.settings)

    def set_settings(self, value: ProviderSettings):
        self.settings = value.to_dict()


class IntegrationStore(models.Model):
    provider = models.ForeignKey(
        IntegrationProvider, on_delete=models.CASCADE, related_name="stores"
    )
    name = models.CharField(max_length=200)
    merchant_supplied_id = models.CharField(
        max_length=100, help_text=_("The store key the marketplace sends in webhooks.")
    )
    provider_store_id = models.CharField(max_length=100, blank=True, null=True)
    active = models.BooleanField(default=True)
    settings = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["provider", "merchant_supplied_id"],
                name="integrationstore_provider_msid_uniq",
            ),
        ]

    def __str__(self):
        return f"{self.name} [{self.merchant_supplied_id}]"

    def get_settings(self) -> StoreSettings:
        return StoreSettings.from_dict(self.settings)

    def set_settings(self, value: StoreSettings):
        self.settings = value.to_dict()


class IntegrationOrder(models.Model):
    """
    Binds one external marketplace order to one POS order.

    ``pos_order`` is set at most once. A save that would change an already
    bound ``pos_order`` raises ``ValueError``.
    """

    provider = models.ForeignKey(
        IntegrationProvider, on_delete=models.PROTECT, related_name="orders"
    )
    store = models.ForeignKey(
        IntegrationStore,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    external_id = models.CharField(max_length=128)
    synthetic_id = models.BooleanField(
        default=False,
        help_text=_("True when the payload carried no external id and one was generated."),
    )
    display_id = models.CharField(max_length=128, blank=True, null=True)
    status = models.CharField(
        max_length=50, default="NEW", help_text=_("Provider-reported status, upper-cased.")
    )
    order_type = models.CharField(max_length=10, choices=Order.OrderType.choices)
    payload = models.JSONField(default=dict, blank=True)
    pos_order = models.OneToOneField(
        Order,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="integration_order",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["provider", "external_id"],
                name="integrationorder_provider_external_uniq",
            ),
        ]
        indexes = [
            models.Index(fields=["status"], name="integrationorder_status_idx"),
        ]

    def __str__(self):
        return f"{self.provider_id}:{self.external_id}"

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance._loaded_pos_order_id = instance.__dict__.get("pos_order_id")
        return instance

    def save(self, *args, **kwargs):
        bound = getattr(self, "_loaded_pos_order_id", None)
        if bound is not None and self.pos_order_id != bound:
            raise ValueError(
                f"Integration order {self.pk} is already bound to POS order {bound}"
            )
        super().save(*args, **kwargs)
        self._loaded_pos_order_id = self.pos_order_id
