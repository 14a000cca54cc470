from rest_framework import serializers

from core_backend.base import BaseModelSerializer, TimestampedSerializer
from .config import ProviderSettings, StoreSettings
from .models import IntegrationOrder, IntegrationProvider, IntegrationStore

SECRET_MASK = "********"


class IntegrationStoreSerializer(TimestampedSerializer):
    provider = serializers.PrimaryKeyRelatedField(queryset=IntegrationProvider.objects.all())

    class Meta:
        model = IntegrationStore
        fields = [
            "id",
            "provider",
            "name",
            "merchant_supplied_id",
            "provider_store_id",
            "active",
            "settings",
            "created_at",
            "updated_at",
        ]
        select_related_fields = ["provider"]

    def validate_settings(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("settings must be an object.")
        return StoreSettings.from_dict(value).to_dict()


class IntegrationProviderSerializer(TimestampedSerializer):
    """
    Provider configuration. The signing secret is write-only in practice:
    responses mask it, and a masked value sent back leaves the stored secret
    unchanged.
    """

    stores = IntegrationStoreSerializer(many=True, read_only=True)

    class Meta:
        model = IntegrationProvider
        fields = ["id", "code", "name", "enabled", "settings", "stores", "created_at", "updated_at"]
        prefetch_related_fields = ["stores"]

    def validate_code(self, value):
        return value.strip().upper()

    def validate_settings(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("settings must be an object.")
        incoming = ProviderSettings.from_dict(value)
        if incoming.signing_secret == SECRET_MASK:
            current = self.instance.get_settings() if self.instance else ProviderSettings()
            incoming.signing_secret = current.signing_secret
        return incoming.to_dict()

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if data.get("settings", {}).get("signing_secret"):
            data["settings"]["signing_secret"] = SECRET_MASK
        return data


class IntegrationOrderSerializer(BaseModelSerializer):
    provider_code = serializers.CharField(source="provider.code", read_only=True)
    store_name = serializers.CharField(source="store.name", read_only=True, default=None)
    pos_order_status = serializers.CharField(source="pos_order.status", read_only=True, default=None)
    pos_order_total = serializers.DecimalField(
        source="pos_order.total_amount", max_digits=10, decimal_places=2, read_only=True, default=None
    )

    class Meta:
        model = IntegrationOrder
        fields = [
            "id",
            "provider",
            "provider_code",
            "store",
            "store_name",
            "external_id",
            "synthetic_id",
            "display_id",
            "status",
            "order_type",
            "payload",
            "pos_order",
            "pos_order_status",
            "pos_order_total",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
        select_related_fields = ["provider", "store", "pos_order"]
