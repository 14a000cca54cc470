from rest_framework import serializers

from core_backend.base import BaseModelSerializer, TimestampedSerializer
from discounts.models import Discount
from menu.models import MenuItem, Modifier
from payments.models import Payment
from payments.serializers import PaymentSerializer
from .models import Order, OrderDiscount, OrderItem, OrderItemModifier


class OrderItemModifierSerializer(BaseModelSerializer):
    class Meta:
        model = OrderItemModifier
        fields = ["id", "modifier", "name", "price", "quantity"]


class OrderItemSerializer(BaseModelSerializer):
    modifiers = OrderItemModifierSerializer(many=True, read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "menu_item", "name", "price", "quantity", "notes", "modifiers"]


class OrderDiscountSerializer(BaseModelSerializer):
    discount_name = serializers.CharField(source="discount.name", read_only=True, default=None)

    class Meta:
        model = OrderDiscount
        fields = ["id", "discount", "discount_name", "amount", "created_at"]


class OrderSerializer(TimestampedSerializer):
    """
    Read representation of an order. Every *_amount field is derived by the
    ledger and read-only.
    """

    items = OrderItemSerializer(many=True, read_only=True)
    applied_discounts = OrderDiscountSerializer(many=True, read_only=True)
    payments = PaymentSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "status",
            "order_type",
            "currency",
            "customer_name",
            "notes",
            "tax_exempt",
            "service_charge",
            "delivery_charge",
            "subtotal_amount",
            "discount_amount",
            "tax_amount",
            "total_amount",
            "paid_amount",
            "due_amount",
            "items",
            "applied_discounts",
            "payments",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
        prefetch_related_fields = [
            "items__modifiers",
            "applied_discounts__discount",
            "payments",
        ]


class OrderCreateSerializer(serializers.Serializer):
    order_type = serializers.ChoiceField(
        choices=Order.OrderType.choices, default=Order.OrderType.DINE_IN
    )
    customer_name = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class AddItemSerializer(serializers.Serializer):
    """Input for adding a catalog item. ``price`` overrides the catalog price."""

    menu_item = serializers.PrimaryKeyRelatedField(queryset=MenuItem.objects.all())
    quantity = serializers.IntegerField(min_value=1, default=1)
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    modifiers = serializers.PrimaryKeyRelatedField(
        queryset=Modifier.objects.filter(active=True), many=True, required=False, default=list
    )


class ApplyDiscountSerializer(serializers.Serializer):
    discount = serializers.PrimaryKeyRelatedField(
        queryset=Discount.objects.all(), required=False, allow_null=True
    )
    amount = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )

    def validate(self, attrs):
        if attrs.get("discount") is None and attrs.get("amount") is None:
            raise serializers.ValidationError("Either discount or amount is required.")
        return attrs


class UpdateChargesSerializer(serializers.Serializer):
    service_charge = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False
    )
    delivery_charge = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False
    )
    tax_exempt = serializers.BooleanField(required=False)


class RecordPaymentSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    method = serializers.ChoiceField(
        choices=Payment.PaymentMethod.choices, default=Payment.PaymentMethod.CASH
    )
    reference = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Payment amount must be positive.")
        return value
