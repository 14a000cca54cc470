from core_backend.base import TimestampedSerializer
from .models import Payment


class PaymentSerializer(TimestampedSerializer):
    class Meta:
        model = Payment
        fields = [
            "id",
            "order",
            "amount",
            "method",
            "status",
            "voided",
            "reference",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
