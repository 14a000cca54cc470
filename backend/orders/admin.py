from django.contrib import admin
from .models import (
    Order,
    OrderItem,
    OrderDiscount,
    OrderItemModifier
)


class OrderItemModifierInline(admin.TabularInline):
    model = OrderItemModifier
    extra = 0
    readonly_fields = ("name", "price", "quantity")
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("price", "get_line_item_total")
    fields = ("name", "menu_item", "quantity", "price", "get_line_item_total")

    def get_line_item_total(self, obj):
        return f"{(obj.price * obj.quantity):,.2f}"

    get_line_item_total.short_description = "Line Item Total"

    def has_add_permission(self, request, obj=None):
        return False


class OrderDiscountInline(admin.TabularInline):
    model = OrderDiscount
    extra = 0
    fields = ("discount", "amount")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Read-mostly view of orders. The financial fields are derived by the
    ledger recompute and can't be edited here.
    """

    list_display = (
        "id",
        "status",
        "order_type",
        "customer_name",
        "total_amount",
        "paid_amount",
        "due_amount",
        "created_at",
    )
    list_filter = ("status", "order_type", "tax_exempt")
    search_fields = ("id", "customer_name")
    readonly_fields = (
        "subtotal_amount",
        "discount_amount",
        "tax_amount",
        "total_amount",
        "paid_amount",
        "due_amount",
        "created_at",
        "updated_at",
    )
    inlines = [OrderItemInline, OrderDiscountInline]


@admin.register(OrderItem)
class OrderItemAdmin(admin.ModelAdmin):
    list_display = ("name", "order", "quantity", "price")
    search_fields = ("name", "order__id")
    inlines = [OrderItemModifierInline]
